import pytest
from sqlalchemy import func, select

from store_api.database.connection import Database
from store_api.models import Product


@pytest.mark.asyncio
class TestDatabase:

    async def test_ping(self, database):
        assert await database.ping() is True

    async def test_session_scope_commits(self, database):
        async with database.session_scope() as session:
            session.add(Product(name="Kept", price=1.0))

        async with database.session() as session:
            assert (await session.execute(select(func.count()).select_from(Product))).scalar() == 1

    async def test_session_scope_rolls_back_on_error(self, database):
        with pytest.raises(RuntimeError):
            async with database.session_scope() as session:
                session.add(Product(name="Lost", price=1.0))
                await session.flush()
                raise RuntimeError("abort")

        async with database.session() as session:
            assert (await session.execute(select(func.count()).select_from(Product))).scalar() == 0

    async def test_file_database_creates_parent_directory(self, tmp_path):
        path = tmp_path / "nested" / "database.sqlite"
        db = Database(f"sqlite+aiosqlite:///{path}")
        try:
            await db.init_schema()
            # idempotent
            await db.init_schema()
            assert path.exists()
        finally:
            await db.dispose()
