"""
Logging filters.

- RequestIdFilter: stamps every LogRecord with `request_id`, read from a
  contextvar that RequestIDMiddleware sets per HTTP request. A contextvar (not
  threading.local) follows the request across awaits.
- RedactFilter: masks record attributes whose name looks sensitive, so an
  `extra={"email": ...}` passed by mistake does not reach the log files.

Records logged outside a request get the sentinel "-", which keeps
`%(request_id)s` format strings from raising KeyError.
"""
import logging
from logging import LogRecord
import contextvars

_request_id_ctx: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "request_id", default=None
)


def set_request_id(request_id: str | None):
    """
    Set the request id in the current context.

    Returns:
        token: pass it to reset_request_id(token) when the request ends
    """
    return _request_id_ctx.set(request_id)


def reset_request_id(token):
    _request_id_ctx.reset(token)


def get_request_id() -> str | None:
    return _request_id_ctx.get()


class RequestIdFilter(logging.Filter):
    """
    Guarantee `record.request_id`, in this order of precedence:
    explicit `extra={"request_id": ...}`, the contextvar, then "-".
    Never drops a record.
    """

    def filter(self, record: LogRecord) -> bool:
        record.request_id = (
            getattr(record, "request_id", None) or get_request_id() or "-"
        )
        return True


class RedactFilter(logging.Filter):
    """Replace the value of sensitive `extra` attributes with a fixed marker."""

    SENSITIVE = {"password", "secret", "token", "authorization", "email", "payload"}
    MASK = "***REDACTED***"

    def filter(self, record: LogRecord) -> bool:
        for key in list(record.__dict__.keys()):
            if key.lower() in self.SENSITIVE:
                record.__dict__[key] = self.MASK
        return True
