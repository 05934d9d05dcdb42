"""
Map storage-level failures onto app-level exceptions.

| Constraint kind (internal) | App-level exception (raised)                |
| -------------------------- | ------------------------------------------- |
| UNIQUE                     | ConflictError (fields = offending columns)  |
| NOT_NULL                   | ConstraintViolationError                    |
| FOREIGN_KEY                | ConstraintViolationError                    |
| CHECK                      | ConstraintViolationError                    |
| UNKNOWN                    | ConstraintViolationError                    |
| any other driver error     | RepositoryError                             |

Messages never include the raw driver text; that only goes to DEBUG logs.
"""
import re
import logging
from contextlib import asynccontextmanager

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from .integrity_classifier import classify_integrity_error, ConstraintKind
from .base import AppError, ConflictError, ConstraintViolationError, RepositoryError

logger = logging.getLogger(__name__)

# -----------------------
# Column extraction helpers
# -----------------------

_COLUMN_PATTERNS = (
    re.compile(r'UNIQUE constraint failed: (?P<cols>.+)$', flags=re.IGNORECASE),
    re.compile(r'NOT NULL constraint failed: (?P<cols>.+)$', flags=re.IGNORECASE),
)


def _extract_columns(msg: str) -> list[str] | None:
    # 'UNIQUE constraint failed: clientes.email' -> ['email']
    for pattern in _COLUMN_PATTERNS:
        m = pattern.search(msg)
        if m:
            return [c.split('.')[-1].strip() for c in re.split(r',\s*', m.group("cols"))]
    return None


def extract_columns_from_integrity(exc: IntegrityError) -> list[str] | None:
    """
    Best-effort extraction of column names from the SQLite message.
    """
    orig = exc.orig
    msg = str(orig) if orig is not None else str(exc)
    return _extract_columns(msg)


# -----------------------
# Mapper
# -----------------------

def map_integrity_error(exc: IntegrityError, model_name: str | None = None) -> AppError:
    """
    Build (without raising) the app-level exception matching an IntegrityError.
    Populates `.fields` and `.constraint` where possible.
    """
    kind, constraint_name = classify_integrity_error(exc)
    columns = extract_columns_from_integrity(exc)
    model_part = model_name or "Record"

    if kind is ConstraintKind.UNIQUE:
        # INFO: duplicates are an expected client-level outcome (409)
        logger.info(
            "mapper.duplicate_detected",
            extra={"model": model_part, "fields": columns, "constraint": constraint_name},
        )
        if columns:
            return ConflictError(
                f"{model_part} already exists for field(s): {', '.join(columns)}",
                fields=columns, constraint=constraint_name,
            )
        return ConflictError(f"{model_part} already exists", constraint=constraint_name)

    if kind is ConstraintKind.NOT_NULL:
        logger.info(
            "mapper.not_null_violation",
            extra={"model": model_part, "fields": columns, "constraint": constraint_name},
        )
        if columns:
            return ConstraintViolationError(
                f"Missing required field(s): {', '.join(columns)} for {model_part}",
                fields=columns, constraint=constraint_name,
            )
        return ConstraintViolationError(f"Missing required field for {model_part}", constraint=constraint_name)

    if kind is ConstraintKind.FOREIGN_KEY:
        logger.info("mapper.foreign_key_violation", extra={"model": model_part, "constraint": constraint_name})
        return ConstraintViolationError(f"{model_part} foreign key constraint violated", constraint=constraint_name)

    raw = str(exc.orig) if exc.orig is not None else str(exc)
    logger.debug("mapper.integrity_raw", extra={"model": model_part, "raw": raw})

    if kind is ConstraintKind.CHECK:
        return ConstraintViolationError(
            f"{model_part} business rule violated (check constraint).", constraint=constraint_name
        )

    logger.warning("mapper.unknown_integrity_error", extra={"model": model_part, "constraint": constraint_name})
    return ConstraintViolationError(f"{model_part} database integrity error.", constraint=constraint_name)


def raise_mapped_integrity_error(exc: IntegrityError, model_name: str | None = None) -> None:
    raise map_integrity_error(exc, model_name) from exc


# -----------------------
# Async context manager to DRY error handling in repositories
# -----------------------

async def _safe_rollback(db: AsyncSession, model_name: str | None) -> None:
    try:
        await db.rollback()
    except Exception:
        logger.exception("Failed to rollback session", extra={"model": model_name})


@asynccontextmanager
async def db_error_handler(db: AsyncSession, model_name: str | None = None):
    """
    Usage:
        async with db_error_handler(self.session, "Customer"):
            ... writes that may raise IntegrityError ...

    On failure the session is rolled back, then:
      - IntegrityError -> mapped app-level exception (ConflictError, ConstraintViolationError)
      - AppError raised inside the block -> re-raised unchanged
      - anything else -> RepositoryError (cause chained)
    """
    try:
        yield
    except IntegrityError as exc:
        await _safe_rollback(db, model_name)
        raise_mapped_integrity_error(exc, model_name)
    except AppError:
        await _safe_rollback(db, model_name)
        raise
    except Exception as exc:
        await _safe_rollback(db, model_name)
        logger.exception("Unexpected DB error for %s", model_name, extra={"model": model_name})
        raise RepositoryError(f"Failed to operate on {model_name or 'database'}") from exc
