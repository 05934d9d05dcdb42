from .base_validator import ValidationResult, ValidationFailure, validate_id, validate_list_query
from .customer_validator import validate_email, validate_customer_create, validate_customer_update
from .product_validator import (
    validate_product_create,
    validate_product_update,
    validate_stock_quantity,
    validate_low_stock_threshold,
)

__all__ = [
    "ValidationResult",
    "ValidationFailure",
    "validate_id",
    "validate_list_query",
    "validate_email",
    "validate_customer_create",
    "validate_customer_update",
    "validate_product_create",
    "validate_product_update",
    "validate_stock_quantity",
    "validate_low_stock_threshold",
]
