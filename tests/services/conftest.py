"""Service test fixtures — async DB, in-memory store, fake clock, FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB sessions
    - get_clock overridden with a FakeClock the test can advance
    - db_manager patched so the readiness check sees the test engine
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from crowdfund.api.dependencies import get_clock
from crowdfund.db.base import Base
from crowdfund.infrastructure.database import get_db, DatabaseSessionManager
from crowdfund.infrastructure.memory_store import InMemoryProjectStore
from crowdfund.services.project_service import ProjectService
import crowdfund.infrastructure.database as db_module
import crowdfund.models  # noqa: F401
from crowdfund.main import app

from tests.services.fakes import FakeClock


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def memory_store():
    return InMemoryProjectStore()


@pytest.fixture
def service(memory_store, clock):
    """ProjectService over an isolated in-memory store."""
    return ProjectService(memory_store, clock=clock)


@pytest.fixture
async def client(test_engine, test_session_factory, clock):
    """FastAPI test client with DB and clock dependencies overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_clock] = lambda: clock

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager
