"""
Customer repository: a configured GenericRepository plus email lookups.
"""
from __future__ import annotations

import logging
from typing import Any, Mapping

from sqlalchemy.ext.asyncio import AsyncSession

from store_api.models.customer import Customer
from store_api.schemas.common import ListOptions
from store_api.schemas.customer import CustomerPage, CustomerRead
from .generic_repository import GenericRepository

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


class CustomerRepository:
    """
    Data access for `clientes`.

    Writable fields: name, email. Free-text search matches name OR email.
    """

    FIELDS = ("name", "email")
    SEARCH_FIELDS = ("name", "email")

    def __init__(self, session: AsyncSession):
        self.session = session
        self.generic = GenericRepository(
            Customer,
            session,
            fields=self.FIELDS,
            search_fields=self.SEARCH_FIELDS,
        )

    async def list(self, options: ListOptions | None = None) -> CustomerPage:
        page = await self.generic.list(options)
        return CustomerPage(
            customers=[CustomerRead.model_validate(row) for row in page.rows],
            pagination=page.pagination,
        )

    async def find_by_id(self, customer_id: int) -> Customer | None:
        return await self.generic.find_by_id(customer_id)

    async def find_by_email(self, email: str) -> Customer | None:
        return await self.generic.find_where("email", normalize_email(email))

    async def email_exists(self, email: str, exclude_id: int | None = None) -> bool:
        """True if another customer (not `exclude_id`) already uses `email`."""
        exists = await self.generic.exists_where("email", normalize_email(email), exclude_id)
        logger.debug("customer.email_exists", extra={"exists": exists, "exclude_id": exclude_id})
        return exists

    @staticmethod
    def _with_normalized_email(data: Mapping[str, Any]) -> dict[str, Any]:
        values = dict(data)
        if isinstance(values.get("email"), str):
            values["email"] = normalize_email(values["email"])
        return values

    async def create(self, data: Mapping[str, Any]) -> Customer:
        return await self.generic.create(self._with_normalized_email(data))

    async def update(self, customer_id: int, data: Mapping[str, Any]) -> Customer | None:
        return await self.generic.update(customer_id, self._with_normalized_email(data))

    async def delete(self, customer_id: int) -> bool:
        return await self.generic.delete(customer_id)

    async def exists(self, customer_id: int) -> bool:
        return await self.generic.exists(customer_id)
