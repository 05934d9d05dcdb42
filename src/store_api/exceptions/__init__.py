# store_api/exceptions/
# ├── base.py                    # App-level errors (ValidationError, NotFoundError, ConflictError, ...)
# ├── integrity_classifier.py    # IntegrityError -> ConstraintKind
# └── mapper.py                  # ConstraintKind -> app-level errors, db_error_handler

from .base import (
    AppError,
    ValidationError,
    NotFoundError,
    ConflictError,
    RepositoryError,
    ConstraintViolationError,
    InvalidFieldError,
)

__all__ = [
    "AppError",
    "ValidationError",
    "NotFoundError",
    "ConflictError",
    "RepositoryError",
    "ConstraintViolationError",
    "InvalidFieldError",
]
