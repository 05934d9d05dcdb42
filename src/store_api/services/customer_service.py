"""
Customer use cases: validation, email uniqueness and find-or-fail on top of
CustomerRepository.
"""
import logging
from typing import Any, Mapping

from store_api.exceptions.base import ConflictError, NotFoundError
from store_api.repositories.customer_repository import CustomerRepository
from store_api.schemas.customer import CustomerPage, CustomerRead
from store_api.validators.base_validator import validate_id, validate_list_query
from store_api.validators.customer_validator import (
    validate_customer_create,
    validate_customer_update,
    validate_email,
)

logger = logging.getLogger(__name__)

SORTABLE_FIELDS = ("id", "name", "email", "created_at")


class CustomerService:
    def __init__(self, repository: CustomerRepository):
        self.repository = repository

    async def _get_or_404(self, customer_id: int):
        customer = await self.repository.find_by_id(customer_id)
        if customer is None:
            raise NotFoundError("Customer not found", fields=["id"])
        return customer

    async def _ensure_email_free(self, email: str, exclude_id: int | None = None) -> None:
        # Best-effort pre-check; the unique constraint on clientes.email still
        # decides races and surfaces as ConflictError from the repository.
        if await self.repository.email_exists(email, exclude_id=exclude_id):
            logger.info("customer.email_conflict", extra={"exclude_id": exclude_id})
            raise ConflictError("Email already registered", fields=["email"])

    async def list_customers(self, raw_query: Mapping[str, Any] | None = None) -> CustomerPage:
        options = validate_list_query(raw_query, sortable=SORTABLE_FIELDS).unwrap()
        return await self.repository.list(options)

    async def get_customer(self, raw_id: Any) -> CustomerRead:
        customer_id = validate_id(raw_id).unwrap()
        return CustomerRead.model_validate(await self._get_or_404(customer_id))

    async def get_customer_by_email(self, raw_email: Any) -> CustomerRead:
        email = validate_email(raw_email).unwrap()
        customer = await self.repository.find_by_email(email)
        if customer is None:
            raise NotFoundError("Customer not found", fields=["email"])
        return CustomerRead.model_validate(customer)

    async def create_customer(self, payload: Any) -> CustomerRead:
        data = validate_customer_create(payload).unwrap()
        await self._ensure_email_free(data.email)
        customer = await self.repository.create(data.model_dump())
        return CustomerRead.model_validate(customer)

    async def update_customer(self, raw_id: Any, payload: Any) -> CustomerRead:
        customer_id = validate_id(raw_id).unwrap()
        changes = validate_customer_update(payload).unwrap().changes()
        await self._get_or_404(customer_id)

        if "email" in changes:
            await self._ensure_email_free(changes["email"], exclude_id=customer_id)

        customer = await self.repository.update(customer_id, changes)
        if customer is None:
            # deleted between the existence check and the write
            raise NotFoundError("Customer not found", fields=["id"])
        return CustomerRead.model_validate(customer)

    async def delete_customer(self, raw_id: Any) -> bool:
        customer_id = validate_id(raw_id).unwrap()
        await self._get_or_404(customer_id)
        return await self.repository.delete(customer_id)
