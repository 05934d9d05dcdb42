from datetime import datetime

from pydantic import BaseModel, ConfigDict, field_validator

from .common import Pagination
from .types import NonBlankStr, NonNegativeInt, Price


class ProductCreate(BaseModel):
    name: NonBlankStr
    price: Price
    stock: NonNegativeInt = 0

    @field_validator("stock", mode="before")
    @classmethod
    def null_stock_is_zero(cls, v):
        return 0 if v is None else v


class ProductUpdate(BaseModel):
    """Partial update: only the attributes that were sent are set."""
    name: NonBlankStr | None = None
    price: Price | None = None
    stock: NonNegativeInt | None = None

    @field_validator("name", "price", "stock", mode="before")
    @classmethod
    def not_null(cls, v):
        # an explicit null would clear a NOT NULL column
        if v is None:
            raise ValueError("must not be null")
        return v

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


class ProductRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    price: float
    stock: int
    created_at: datetime | None = None


class ProductPage(BaseModel):
    products: list[ProductRead]
    pagination: Pagination
