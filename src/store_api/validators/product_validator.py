"""Validators for product payloads and stock parameters."""
from typing import Any

from pydantic import TypeAdapter

from store_api.schemas.product import ProductCreate, ProductUpdate
from store_api.schemas.types import NonNegativeInt
from .base_validator import ValidationResult, is_missing, validate_model, validate_value

DEFAULT_LOW_STOCK_THRESHOLD = 5

_non_negative_int = TypeAdapter(NonNegativeInt)


def validate_product_create(payload: Any) -> ValidationResult[ProductCreate]:
    return validate_model(ProductCreate, payload)


def validate_product_update(payload: Any) -> ValidationResult[ProductUpdate]:
    """Partial update: only name/price/stock keys that are present are checked and kept."""
    return validate_model(ProductUpdate, payload)


def validate_stock_quantity(value: Any, field_name: str = "stock") -> ValidationResult[int]:
    return validate_value(_non_negative_int, value, field_name)


def validate_low_stock_threshold(value: Any = None) -> ValidationResult[int]:
    if is_missing(value):
        return ValidationResult.ok(DEFAULT_LOW_STOCK_THRESHOLD)
    return validate_value(_non_negative_int, value, "threshold")
