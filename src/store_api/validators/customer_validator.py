"""Validators for customer payloads."""
from typing import Any

from pydantic import TypeAdapter

from store_api.schemas.customer import CustomerCreate, CustomerUpdate
from store_api.schemas.types import Email
from .base_validator import ValidationResult, validate_model, validate_value

_email_adapter = TypeAdapter(Email)


def validate_email(value: Any) -> ValidationResult[str]:
    """Trim, lower-case, then check the shape local@domain.tld."""
    return validate_value(_email_adapter, value, "email")


def validate_customer_create(payload: Any) -> ValidationResult[CustomerCreate]:
    return validate_model(CustomerCreate, payload)


def validate_customer_update(payload: Any) -> ValidationResult[CustomerUpdate]:
    """Partial update: absent keys are left alone, present keys follow the create rules."""
    return validate_model(CustomerUpdate, payload)
