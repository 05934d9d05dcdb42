"""
Validation primitives shared by the resource validators.

Validators are pure: no storage access, no logging side effects that matter.
Each public validator returns a `ValidationResult` instead of raising, so the
caller decides whether a failure is an error (`unwrap()`) or just a branch.

The rules themselves live on the pydantic schemas (schemas/types.py); the
helpers here run a schema and fold a `pydantic.ValidationError` into a failed
result that names the offending fields.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, Iterable, Mapping, TypeVar

from pydantic import BaseModel, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from store_api.exceptions.base import ValidationError
from store_api.schemas.common import ListOptions
from store_api.schemas.types import PositiveId

T = TypeVar("T")
ModelT = TypeVar("ModelT", bound=BaseModel)

LIST_QUERY_KEYS = ("page", "limit", "search", "order_by", "order_direction")

_id_adapter = TypeAdapter(PositiveId)


@dataclass(frozen=True)
class ValidationFailure:
    message: str
    fields: list[str] = field(default_factory=list)
    status_hint: int = 400


@dataclass(frozen=True)
class ValidationResult(Generic[T]):
    valid: bool
    data: T | None = None
    error: ValidationFailure | None = None

    @classmethod
    def ok(cls, data: T) -> "ValidationResult[T]":
        return cls(valid=True, data=data)

    @classmethod
    def fail(cls, message: str, fields: Iterable[str] = ()) -> "ValidationResult[T]":
        return cls(valid=False, error=ValidationFailure(message=message, fields=list(fields)))

    def unwrap(self) -> T:
        """Return the normalized data or raise ValidationError with the failure message."""
        if not self.valid:
            raise ValidationError(self.error.message, fields=self.error.fields or None)
        return self.data


def failure_from(exc: PydanticValidationError, field_name: str = "body") -> ValidationResult:
    """
    Fold pydantic's error list into one result.

    fields: every offending top-level field, in declaration order
    message: "<field>: <reason>" for the first of them
    """
    fields: list[str] = []
    reasons: list[str] = []
    for err in exc.errors():
        name = str(err["loc"][0]) if err["loc"] else field_name
        if name not in fields:
            fields.append(name)
            reasons.append(err["msg"].removeprefix("Value error, "))
    return ValidationResult.fail(f"{fields[0]}: {reasons[0]}", fields)


def validate_model(model: type[ModelT], payload: Any) -> ValidationResult[ModelT]:
    """Validate a request body against `model`; anything but a JSON object is refused."""
    if not isinstance(payload, Mapping):
        return ValidationResult.fail("Request body must be a JSON object", ["body"])
    try:
        return ValidationResult.ok(model.model_validate(payload))
    except PydanticValidationError as e:
        return failure_from(e)


def validate_value(adapter: TypeAdapter, value: Any, field_name: str) -> ValidationResult:
    """Validate a single value (path or query parameter) with a TypeAdapter."""
    try:
        return ValidationResult.ok(adapter.validate_python(value))
    except PydanticValidationError as e:
        return failure_from(e, field_name)


def is_missing(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value.strip() == "")


# =================================================================================================================
# Generic validators
# =================================================================================================================

def validate_id(value: Any) -> ValidationResult[int]:
    """Positive integer id, given as int or as a string of digits (path parameter)."""
    result = validate_value(_id_adapter, value, "id")
    if not result.valid:
        return ValidationResult.fail("Invalid id", ["id"])
    return result


def validate_list_query(raw: Mapping[str, Any] | None, sortable: Iterable[str] | None = None) -> ValidationResult[ListOptions]:
    """
    Validate listing parameters (usually query-string values, hence strings).

    Blank values fall back to the ListOptions defaults (page 1, limit 10,
    DESC); unknown keys are ignored. `order_by` must be one of `sortable`
    when that set is given.
    """
    values = {k: v for k, v in (raw or {}).items() if k in LIST_QUERY_KEYS and not is_missing(v)}

    order_by = values.get("order_by")
    if order_by is not None and sortable is not None and (not isinstance(order_by, str) or order_by not in set(sortable)):
        return ValidationResult.fail(f"order_by must be one of: {', '.join(sorted(sortable))}", ["order_by"])

    try:
        return ValidationResult.ok(ListOptions.model_validate(values))
    except PydanticValidationError as e:
        return failure_from(e)
