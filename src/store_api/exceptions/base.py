"""
Application-level exceptions.

Every error the core can surface derives from `AppError`. The HTTP adapter is the
only layer that turns them into status codes, through `http_status()`.
"""

from typing import Iterable


class AppError(Exception):
    """
    Base exception for repository/service errors.

    - message: human-friendly message (safe to show to clients)
    - fields: optional list of field names related to the error (e.g., ['email'])
    - constraint: optional DB constraint name or identifier (for logs only)
    - error_code: canonical short code (e.g., 'conflict', 'not_found') used by clients
    """

    # Map canonical error_code -> HTTP status.
    ERROR_CODE_TO_STATUS = {
        "validation_error": 400,
        "invalid_field": 400,
        "not_found": 404,
        "conflict": 409,
        "constraint_violation": 500,
        "repository_error": 500,
    }

    default_code = "internal_error"

    def __init__(self, message: str, *, fields: Iterable[str] | None = None,
                 constraint: str | None = None, error_code: str | None = None):
        super().__init__(message)
        self.message = message
        self.fields = list(fields) if fields else None
        self.constraint = constraint
        self.error_code = error_code or self.default_code

    def __str__(self) -> str:
        base = self.message
        parts = []
        if self.fields:
            parts.append(f"fields: {', '.join(self.fields)}")
        if self.constraint:
            parts.append(f"constraint: {self.constraint}")
        if self.error_code:
            parts.append(f"code: {self.error_code}")
        if parts:
            return f"{base} ({'; '.join(parts)})"
        return base

    def to_payload(self) -> dict:
        """
        Return a JSON-serializable dict for the `error` member of the HTTP envelope:
            {
                "message": "Email already registered",
                "status": 409,
                "code": "conflict",
                "fields": ["email"],     # only when known
            }
        `constraint` is intentionally left out; it is for logs only.
        """
        payload = {"message": self.message, "status": self.http_status()}
        if self.error_code:
            payload["code"] = self.error_code
        if self.fields:
            payload["fields"] = list(self.fields)
        return payload

    def http_status(self) -> int:
        return self.ERROR_CODE_TO_STATUS.get(self.error_code, 500)


class ValidationError(AppError):
    """Input rejected by a validator or a business rule (400)."""

    def __init__(self, message: str, *, fields: Iterable[str] | None = None):
        super().__init__(message, fields=fields, error_code="validation_error")


class NotFoundError(AppError):
    def __init__(self, message: str = "Not found", *, fields: Iterable[str] | None = None):
        super().__init__(message, fields=fields, error_code="not_found")


class ConflictError(AppError):
    """Uniqueness rule violated, either by the service pre-check or by the engine (409)."""

    def __init__(self, message: str, *, fields: Iterable[str] | None = None, constraint: str | None = None):
        super().__init__(message, fields=fields, constraint=constraint, error_code="conflict")


class RepositoryError(AppError):
    """Storage failure that is not the caller's fault (500)."""

    default_code = "repository_error"


class ConstraintViolationError(RepositoryError):
    """A storage constraint other than uniqueness rejected the write (500)."""

    def __init__(self, message: str, *, fields: Iterable[str] | None = None, constraint: str | None = None):
        super().__init__(message, fields=fields, constraint=constraint, error_code="constraint_violation")


class InvalidFieldError(RepositoryError):
    """Raised when the caller passes a field name the model does not map (order_by, search fields...)."""

    def __init__(self, message: str, *, fields: Iterable[str] | None = None):
        super().__init__(message, fields=fields, error_code="invalid_field")


__all__ = [
    "AppError",
    "ValidationError",
    "NotFoundError",
    "ConflictError",
    "RepositoryError",
    "ConstraintViolationError",
    "InvalidFieldError",
]
