"""
Connection provider.

`Database` owns the single `AsyncEngine` of the process and the session factory bound
to it. It replaces a module-level engine: the instance is created by the app factory
(or by a test fixture) and handed down explicitly.

SQLite notes:
    - `sqlite+aiosqlite:///:memory:` gets a `StaticPool`, so every session shares the
      one connection that holds the in-memory database.
    - File databases get a pool of exactly one connection. Sessions queue on it, which
      serializes calls the same way a single shared handle would.
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator

from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from store_api.database.base import Base

logger = logging.getLogger(__name__)


def _is_memory_url(url: str) -> bool:
    database = make_url(url).database
    return database in (None, "", ":memory:")


class Database:
    """
    Lazily-created engine + session factory for one database URL.

    Usage:
        db = Database(settings.database_url)
        await db.init_schema()
        async with db.session() as session:
            ...
        await db.dispose()
    """

    def __init__(self, url: str, *, echo: bool = False):
        self.url = url
        self.echo = echo
        self._engine: AsyncEngine | None = None
        self._sessionmaker: async_sessionmaker[AsyncSession] | None = None

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            self._engine = self._create_engine()
        return self._engine

    @property
    def sessionmaker(self) -> async_sessionmaker[AsyncSession]:
        if self._sessionmaker is None:
            # expire_on_commit=False keeps returned records readable after the
            # request dependency commits.
            self._sessionmaker = async_sessionmaker(
                bind=self.engine,
                class_=AsyncSession,
                expire_on_commit=False,
            )
        return self._sessionmaker

    def _create_engine(self) -> AsyncEngine:
        if _is_memory_url(self.url):
            engine = create_async_engine(
                self.url,
                echo=self.echo,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
        else:
            engine = create_async_engine(
                self.url,
                echo=self.echo,
                pool_size=1,
                max_overflow=0,
                pool_pre_ping=True,
            )
        logger.info("db.engine.created", extra={"in_memory": _is_memory_url(self.url)})
        return engine

    def _ensure_parent_dir(self) -> None:
        if _is_memory_url(self.url):
            return
        database = make_url(self.url).database
        Path(database).expanduser().resolve().parent.mkdir(parents=True, exist_ok=True)

    async def init_schema(self) -> None:
        """
        Create every mapped table if it does not exist yet (CREATE TABLE IF NOT EXISTS).
        Safe to call on every startup.
        """
        # Register the models on Base.metadata before create_all runs.
        from store_api import models  # noqa: F401

        self._ensure_parent_dir()
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("db.schema.ready", extra={"tables": sorted(Base.metadata.tables)})

    def session(self) -> AsyncSession:
        """Return a new AsyncSession; use it as an async context manager."""
        return self.sessionmaker()

    @asynccontextmanager
    async def session_scope(self) -> AsyncIterator[AsyncSession]:
        """
        Yield a session and commit when the caller finishes without error.
        Any exception rolls the session back and is re-raised unchanged.
        """
        async with self.session() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def ping(self) -> bool:
        async with self.engine.connect() as conn:
            result = await conn.execute(text("SELECT 1"))
            return result.scalar() == 1

    async def dispose(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
            logger.info("db.engine.disposed")
        self._engine = None
        self._sessionmaker = None
