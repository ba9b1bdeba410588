"""Service test fixtures: async DB + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use the test engine
    - The products rate limiter starts empty for every test

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
      (PostgreSQL-specific behavior is not exercised here)
"""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)

from product_api.db.base import Base
from product_api.infrastructure.database import get_db
from product_api.infrastructure.product_store import SqlProductStore
from product_api.main import app, rate_limiter
from product_api.services.product_handler import ProductHandler
import product_api.models  # noqa: F401

from tests.services.fake_product_store import FakeProductStore


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
def sql_store(test_db):
    return SqlProductStore(test_db)


@pytest.fixture
def fake_store():
    return FakeProductStore()


@pytest.fixture
def handler(fake_store):
    return ProductHandler(fake_store)


@pytest.fixture(autouse=True)
def fresh_rate_limiter():
    rate_limiter.reset()
    yield rate_limiter
    rate_limiter.reset()


@pytest.fixture
async def client(test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
def pen():
    return {"name": "Pen", "brand": "Acme", "category": "Stationery", "price": 1.5}
