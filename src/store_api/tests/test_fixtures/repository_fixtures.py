"""Fixtures for repository tests."""

import uuid

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from store_api.models import Customer, Product
from store_api.repositories.customer_repository import CustomerRepository
from store_api.repositories.generic_repository import GenericRepository
from store_api.repositories.product_repository import ProductRepository

# NOTE: everything here depends on `db_session` from conftest.py (fresh in-memory DB per test).


@pytest.fixture
async def generic_product_repo(db_session: AsyncSession) -> GenericRepository[Product]:
    """
    A GenericRepository configured like ProductRepository's inner one.
    Used by tests that exercise the generic operations directly.
    """
    return GenericRepository(Product, db_session, fields=("name", "price", "stock"), search_fields=("name",))


@pytest.fixture
async def generic_customer_repo(db_session: AsyncSession) -> GenericRepository[Customer]:
    return GenericRepository(Customer, db_session, fields=("name", "email"), search_fields=("name", "email"))


@pytest.fixture
async def product_repository(db_session: AsyncSession) -> ProductRepository:
    return ProductRepository(db_session)


@pytest.fixture
async def customer_repository(db_session: AsyncSession) -> CustomerRepository:
    return CustomerRepository(db_session)


@pytest.fixture
def sample_product_data() -> dict:
    return {"name": "Widget", "price": 9.99, "stock": 5}


@pytest.fixture
def sample_customer_data() -> dict:
    return {"name": "Ana Souza", "email": "ana@example.com"}


@pytest.fixture
async def create_product(generic_product_repo: GenericRepository[Product]):
    """
    Factory: `product = await create_product(name="Gadget", stock=0)`.
    Unspecified fields get unique/valid defaults.
    """
    async def _create(**overrides) -> Product:
        data = {"name": f"product_{uuid.uuid4().hex[:8]}", "price": 10.0, "stock": 10}
        data.update(overrides)
        return await generic_product_repo.create(data)

    return _create


@pytest.fixture
async def create_customer(generic_customer_repo: GenericRepository[Customer]):
    async def _create(**overrides) -> Customer:
        token = uuid.uuid4().hex[:8]
        data = {"name": f"customer_{token}", "email": f"customer_{token}@example.com"}
        data.update(overrides)
        return await generic_customer_repo.create(data)

    return _create


@pytest.fixture
async def multiple_products(create_product) -> list[Product]:
    """Twelve products named 'Item 01'..'Item 12' with stock 0..11."""
    return [
        await create_product(name=f"Item {i:02d}", price=float(i + 1), stock=i)
        for i in range(12)
    ]
