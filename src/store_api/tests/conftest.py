"""
Core pytest configuration for the entire test suite.

Only the database setup and session-wide logging live here. Domain fixtures
(repositories, factories, services) are in tests/test_fixtures/ and are
imported at the bottom of this module so every test module can use them.
"""

from __future__ import annotations

import logging
from typing import AsyncGenerator

# -------------------------------
# Early logging tuning
# -------------------------------
# Set noisy third-party loggers to WARNING before importing anything that may
# initialize them, so collection output stays readable.
NOISY_LOGGERS = (
    "sqlalchemy",
    "sqlalchemy.engine",
    "sqlalchemy.engine.Engine",
    "aiosqlite",
    "asyncio",
    "httpx",
)
for _name in NOISY_LOGGERS:
    logging.getLogger(_name).setLevel(logging.WARNING)

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from store_api.config.settings import Settings
from store_api.core.logging.builder import setup_logging
from store_api.database.connection import Database

IN_MEMORY_URL = "sqlite+aiosqlite:///:memory:"


def make_test_settings(**overrides) -> Settings:
    values = dict(
        ENV="testing",
        TESTING=True,
        TEST_DATABASE_URL=IN_MEMORY_URL,
        LOG_LEVEL="WARNING",
        LOG_FORMAT="text",
        LOG_TO_STDOUT=True,
    )
    values.update(overrides)
    return Settings(**values)


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return make_test_settings()


@pytest.fixture(scope="session", autouse=True)
def configure_logging(test_settings: Settings):
    """
    Install the application's dictConfig once for the session so formatters and
    filters under test behave exactly as in the app.
    """
    setup_logging(test_settings)
    yield


# ------------------------------------------------------------------------------------------------
# DATABASE FIXTURES
# ------------------------------------------------------------------------------------------------

@pytest.fixture()
async def database(test_settings: Settings) -> AsyncGenerator[Database, None]:
    """
    A fresh in-memory database per test.

    Each Database owns its own engine, and an in-memory SQLite database lives
    exactly as long as its connection, so tests never see each other's rows and
    no SAVEPOINT bookkeeping is needed.
    """
    db = Database(test_settings.database_url)
    await db.init_schema()
    yield db
    await db.dispose()


@pytest.fixture()
async def db_session(database: Database) -> AsyncGenerator[AsyncSession, None]:
    async with database.session() as session:
        yield session
        await session.rollback()


# Repository / service fixtures
from .test_fixtures.repository_fixtures import (  # noqa: E402,F401
    product_repository,
    customer_repository,
    generic_product_repo,
    generic_customer_repo,
    sample_product_data,
    sample_customer_data,
    create_product,
    create_customer,
    multiple_products,
)
from .test_fixtures.service_fixtures import (  # noqa: E402,F401
    product_service,
    customer_service,
)
