from datetime import datetime

from pydantic import BaseModel, ConfigDict, field_validator

from .common import Pagination
from .types import Email, NonBlankStr


class CustomerCreate(BaseModel):
    name: NonBlankStr
    email: Email


class CustomerUpdate(BaseModel):
    """Partial update: only the attributes that were sent are set."""
    name: NonBlankStr | None = None
    email: Email | None = None

    @field_validator("name", "email", mode="before")
    @classmethod
    def not_null(cls, v):
        if v is None:
            raise ValueError("must not be null")
        return v

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


class CustomerRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    created_at: datetime | None = None


class CustomerPage(BaseModel):
    customers: list[CustomerRead]
    pagination: Pagination
