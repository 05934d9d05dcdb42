"""Shared structured inputs and the pagination block."""
from __future__ import annotations

import math
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .types import SQLITE_INTEGER_MAX, reject_bool

DEFAULT_LIMIT = 10
MAX_LIMIT = 100


class ListOptions(BaseModel):
    """
    Listing descriptor accepted by `GenericRepository.list()`.

    page >= 1 and limit in [1, 100]; the page bound keeps the OFFSET inside
    SQLite's integer range. Whether `order_by` names a sortable attribute is
    decided by the caller (`validate_list_query`) or the repository.
    """
    model_config = ConfigDict(frozen=True)

    page: int = Field(1, ge=1, le=SQLITE_INTEGER_MAX // MAX_LIMIT)
    limit: int = Field(DEFAULT_LIMIT, ge=1, le=MAX_LIMIT)
    search: str = ""
    search_fields: tuple[str, ...] | None = None
    order_by: str | None = None
    order_direction: Literal["ASC", "DESC"] = "DESC"

    @field_validator("page", "limit", mode="before")
    @classmethod
    def no_bool(cls, v):
        return reject_bool(v)

    @field_validator("search", mode="before")
    @classmethod
    def strip_search(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("order_direction", mode="before")
    @classmethod
    def upper_direction(cls, v):
        return v.strip().upper() if isinstance(v, str) else v

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class Pagination(BaseModel):
    current_page: int
    per_page: int
    total_items: int
    total_pages: int
    has_next: bool
    has_prev: bool

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "Pagination":
        total_pages = math.ceil(total / limit) if limit > 0 else 0
        return cls(
            current_page=page,
            per_page=limit,
            total_items=total,
            total_pages=total_pages,
            has_next=page < total_pages,
            has_prev=page > 1,
        )
