"""Service test fixtures — async DB, round store and FastAPI test clients.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - client: get_db overridden to use the test engine; db_manager patched so
      the readiness probe sees the same engine
    - managed_client: no override; requests go through a real
      DatabaseSessionManager on a file database, error mapping included

Design Decisions:
    - SQLite in-memory: fast, no external dependency; canonical timestamp
      strings make every query dialect-neutral
    - managed_client uses a file under tmp_path: every pooled aiosqlite
      connection must see the same database
"""

import pytest
from httpx import ASGITransport, AsyncClient

from roundwatch.db.base import Base
from roundwatch.db.session import create_session_factory
import roundwatch.models  # noqa: F401
from roundwatch.infrastructure.database import get_db, DatabaseSessionManager
from roundwatch.services.round_store import SqlAlchemyRoundStore
import roundwatch.infrastructure.database as db_module
from roundwatch.main import app


@pytest.fixture
async def test_session_factory():
    factory = create_session_factory("sqlite+aiosqlite:///:memory:")
    engine = factory.kw["bind"]
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield factory
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def test_engine(test_session_factory):
    return test_session_factory.kw["bind"]


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def store(test_db):
    return SqlAlchemyRoundStore(test_db)


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    # Readiness probe goes through db_manager, not get_db
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


@pytest.fixture
async def db_manager(tmp_path):
    """Real DatabaseSessionManager on a fresh SQLite file."""
    manager = DatabaseSessionManager(
        f"sqlite+aiosqlite:///{tmp_path / 'roundwatch.db'}",
    )
    async with manager.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield manager
    await manager.dispose()


@pytest.fixture
async def managed_client(db_manager):
    """FastAPI test client whose get_db runs through db_manager.session()."""
    app.dependency_overrides.clear()
    original_manager = db_module.db_manager
    db_module.db_manager = db_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    db_module.db_manager = original_manager
