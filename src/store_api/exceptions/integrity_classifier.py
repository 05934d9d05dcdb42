"""
Classify a SQLAlchemy IntegrityError into the kind of constraint that failed.

The classification is internal: callers get a `ConstraintKind` and the mapper
(mapper.py) decides which app-level exception to raise for it.
"""
import logging
import re
from enum import Enum

from sqlalchemy.exc import IntegrityError

logger = logging.getLogger(__name__)


class ConstraintKind(str, Enum):
    UNIQUE = "unique"
    NOT_NULL = "not_null"
    FOREIGN_KEY = "foreign_key"
    CHECK = "check"
    UNKNOWN = "unknown"


# SQLite messages, checked in order:
#   "UNIQUE constraint failed: clientes.email"
#   "NOT NULL constraint failed: produtos.nome"
#   "FOREIGN KEY constraint failed"
#   "CHECK constraint failed: ck_produtos_preco"
_MESSAGE_KEYWORDS = (
    (ConstraintKind.UNIQUE, "unique constraint"),
    (ConstraintKind.NOT_NULL, "not null constraint"),
    (ConstraintKind.FOREIGN_KEY, "foreign key constraint"),
    (ConstraintKind.CHECK, "check constraint"),
)

_TARGET_RE = re.compile(r"constraint failed: (?P<target>.+)$", flags=re.IGNORECASE)


def _driver_message(exc: IntegrityError) -> str:
    return str(exc.orig) if exc.orig is not None else str(exc)


def classify_integrity_error(exc: IntegrityError) -> tuple[ConstraintKind, str | None]:
    """
    Classify an IntegrityError from its SQLite message.

    Returns:
        A tuple of (ConstraintKind, what SQLite reports as failing, e.g.
        "clientes.email" or "ck_produtos_preco"; None when it reports nothing)
    """
    msg = _driver_message(exc)
    m = _TARGET_RE.search(msg)
    target = m.group("target").strip() if m else None

    normalized = msg.lower()
    for kind, keyword in _MESSAGE_KEYWORDS:
        if keyword in normalized:
            return kind, target

    logger.warning("Unknown integrity error message encountered", extra={"message_snippet": msg[:200]})
    return ConstraintKind.UNKNOWN, target
