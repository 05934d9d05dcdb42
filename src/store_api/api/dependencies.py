"""
FastAPI dependencies wiring Database -> AsyncSession -> repository -> service.

The Database handle lives on `app.state.database` (set by create_app); nothing
here reaches for a module-level engine.
"""
from typing import AsyncGenerator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from store_api.database.connection import Database
from store_api.repositories.customer_repository import CustomerRepository
from store_api.repositories.product_repository import ProductRepository
from store_api.services.customer_service import CustomerService
from store_api.services.product_service import ProductService


def get_database(request: Request) -> Database:
    return request.app.state.database


async def get_session(database: Database = Depends(get_database)) -> AsyncGenerator[AsyncSession, None]:
    """
    One session per request. Commit when the endpoint returns normally,
    roll back and re-raise otherwise; repositories only flush.
    """
    async with database.session_scope() as session:
        yield session


def get_product_service(session: AsyncSession = Depends(get_session)) -> ProductService:
    return ProductService(ProductRepository(session))


def get_customer_service(session: AsyncSession = Depends(get_session)) -> CustomerService:
    return CustomerService(CustomerRepository(session))
