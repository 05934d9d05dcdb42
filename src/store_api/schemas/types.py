"""
Constrained value types shared by the request schemas and the standalone validators.

Numbers arrive either as JSON numbers or as query-string text, so pydantic's lax
mode does the coercion ("3" -> 3, 3.0 -> 3) and the constraints below do the rest.
Booleans are refused up front because pydantic would otherwise read True as 1.
"""
import re
from decimal import Decimal, ROUND_HALF_UP
from typing import Annotated, Any

from pydantic import AfterValidator, BeforeValidator, Field, StringConstraints

# SQLite INTEGER is a signed 64-bit value; larger ints overflow in the driver
SQLITE_INTEGER_MAX = 2**63 - 1

MAX_PRICE = 1_000_000_000_000.0

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

_TWO_PLACES = Decimal("0.01")


def reject_bool(value: Any) -> Any:
    if isinstance(value, bool):
        raise ValueError("booleans are not accepted")
    if isinstance(value, str):
        return value.strip()
    return value


def round_money(value: Decimal | float) -> float:
    """Round half-up to 2 decimal places: 9.999 -> 10.0, 1.005 -> 1.01."""
    return float(Decimal(str(value)).quantize(_TWO_PLACES, rounding=ROUND_HALF_UP))


def _rounded_price(value: float) -> float:
    price = round_money(value)
    if price <= 0:
        # 0.004 rounds to 0.00
        raise ValueError("price must be greater than 0 after rounding to 2 decimals")
    return price


def _normalized_email(value: str) -> str:
    email = value.strip().lower()
    if not EMAIL_RE.match(email):
        raise ValueError("email is invalid")
    return email


NonBlankStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]

PositiveId = Annotated[int, BeforeValidator(reject_bool), Field(ge=1, le=SQLITE_INTEGER_MAX)]

NonNegativeInt = Annotated[int, BeforeValidator(reject_bool), Field(ge=0, le=SQLITE_INTEGER_MAX)]

Price = Annotated[
    float,
    BeforeValidator(reject_bool),
    Field(gt=0, le=MAX_PRICE, allow_inf_nan=False),
    AfterValidator(_rounded_price),
]

Email = Annotated[str, AfterValidator(_normalized_email)]
