"""Root conftest — shared fixtures: in-memory store, fake cache/index, API client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - Cache and index are in-memory fakes with switchable failure injection
    - API tests inject collaborators through dependency_overrides, never module patching

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for the store contract
      (ADR: tag containment has a json_each path so SQLite exercises the same behavior)
    - StaticPool: every session sees the same in-memory database
    - httpx ASGITransport does not run the lifespan, so no real Redis/Elasticsearch is dialed
"""

import os

# Ensure tests don't accidentally reach real services
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///test.db")
os.environ.setdefault("REDIS_URL", "redis://localhost:6379/15")
os.environ.setdefault("ELASTICSEARCH_URL", "http://localhost:9200")

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from app.api.dependencies import get_post_service, get_post_store  # noqa: E402
from app.db.base import Base  # noqa: E402
from app.models import ActivityLog, PostRow  # noqa: E402,F401
from app.infrastructure.database import DatabaseSessionManager  # noqa: E402
from app.infrastructure.post_store import SqlAlchemyPostStore  # noqa: E402
from app.main import app  # noqa: E402
from app.services.post_service import PostService  # noqa: E402

from tests.fake_backends import FakeCache, FakeIndex  # noqa: E402


@pytest_asyncio.fixture
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
def db_manager(test_engine):
    return DatabaseSessionManager(test_engine)


@pytest.fixture
def store(db_manager):
    return SqlAlchemyPostStore(db_manager)


@pytest.fixture
def cache():
    return FakeCache()


@pytest.fixture
def index():
    return FakeIndex()


@pytest.fixture
def service(store, cache, index):
    return PostService(store=store, cache=cache, index=index, related_size=5)


@pytest_asyncio.fixture
async def client(store, service):
    """FastAPI test client with store/cache/index dependencies overridden."""
    app.dependency_overrides[get_post_service] = lambda: service
    app.dependency_overrides[get_post_store] = lambda: store

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
