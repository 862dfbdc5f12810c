# @TASK S0-T0.3 - Test configuration
import os
from collections.abc import AsyncGenerator

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

# Set test environment variables before importing journal modules
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("LOG_LEVEL", "DEBUG")


@pytest_asyncio.fixture(scope="function")
async def session_factory(tmp_path) -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """Provide a session factory bound to a fresh file-backed SQLite database.

    A file database (rather than ``:memory:``) lets concurrent searches
    open several connections that all see the same data.
    """
    from journal.database import Base, build_engine, build_session_factory
    import journal.models  # noqa: F401 - Import to register models with Base

    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'journal_test.db'}")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield build_session_factory(engine)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def test_db(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Provide an async database session on the test database."""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture(scope="function")
async def paris_data(test_db: AsyncSession) -> AsyncSession:
    """Seed the "Summer in Paris" journal.

    - Collection C1 "Summer in Paris"
    - Item I1 "Eiffel Tower photo" in C1 (note, importance 3), tagged T1
    - Tag T1 "travel"
    """
    from journal.models import Collection, Item, Tag, item_tags

    test_db.add(Collection(id="C1", title="Summer in Paris", description="Two weeks in France"))
    await test_db.flush()
    test_db.add_all(
        [
            Item(
                id="I1",
                collection_id="C1",
                sub_type="note",
                title="Eiffel Tower photo",
                description="View from the Trocadero",
                importance=3,
            ),
            Tag(id="T1", name="travel"),
        ]
    )
    await test_db.flush()
    await test_db.execute(item_tags.insert(), [{"item_id": "I1", "tag_id": "T1"}])
    await test_db.commit()
    return test_db


@pytest_asyncio.fixture(scope="function")
async def test_app(session_factory, test_db: AsyncSession):
    """Provide the FastAPI app wired to the test database."""
    from unittest.mock import patch

    from journal.database import get_db
    from journal.main import app
    from journal.search.engine import JournalSearchEngine

    async def override_get_db():
        yield test_db
        await test_db.commit()

    app.dependency_overrides[get_db] = override_get_db
    with patch(
        "journal.api.search._build_engine",
        return_value=JournalSearchEngine(session_factory),
    ):
        yield app
    app.dependency_overrides.clear()


@pytest_asyncio.fixture(scope="function")
async def test_client(test_app) -> AsyncGenerator[AsyncClient, None]:
    """Provide an async HTTP client for testing with test database."""
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
