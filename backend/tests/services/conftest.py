"""Service test fixtures — async DB, repository and FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB session
    - db_manager patched so the readiness check sees the test engine
    - client sends the identity header by default

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
    - StaticPool: every session shares the one in-memory database
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool
from httpx import ASGITransport, AsyncClient

from order_api.db.base import Base
from order_api.infrastructure.database import get_db, DatabaseSessionManager
from order_api.infrastructure.document_repository import SqlDocumentRepository
from order_api.models.order_item import OrderItem
from order_api.schemas.order_item import OrderItemDocument
import order_api.infrastructure.database as db_module
from order_api.main import app

USER_ID = "user-1"


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
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
def repository(test_db):
    return SqlDocumentRepository(
        test_db, OrderItem, OrderItemDocument,
        default_page_limit=10, max_page_limit=500,
    )


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
        headers={"X-User-Id": USER_ID},
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager
