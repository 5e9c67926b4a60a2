"""Pytest configuration and fixtures for integration tests."""

from typing import Generator

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from api.dependencies import reset_dependencies
from core.infrastructure.database.config import create_session_factory, init_database
from core.infrastructure.database.models import Base


# Use in-memory SQLite for testing
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture(scope="function")
async def test_engine():
    """Create test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )

    await init_database(engine)

    yield engine

    # Cleanup
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def test_session_factory(test_engine):
    """Create test session factory."""
    yield create_session_factory(test_engine)


@pytest.fixture
def api_env(monkeypatch, tmp_path):
    """Environment for an API process: fast polling, uploads under tmp_path."""
    monkeypatch.setenv("APP_UPLOAD_DIR", str(tmp_path / "uploads"))
    monkeypatch.setenv("ORCHESTRATION_STORE_BACKEND", "memory")
    monkeypatch.setenv("ORCHESTRATION_POLL_INTERVAL_SECONDS", "0")
    monkeypatch.setenv("ORCHESTRATION_RUNTIME_POLL_INTERVAL_SECONDS", "0")
    monkeypatch.setenv("STARKNET_USE_MOCK", "true")
    monkeypatch.delenv("AGENT_CREATION_WORKFLOW", raising=False)
    return tmp_path


@pytest.fixture
def test_client(api_env) -> Generator[TestClient, None, None]:
    """FastAPI test client over freshly built dependencies."""
    from api.main import app

    reset_dependencies()
    with TestClient(app) as client:
        yield client
    reset_dependencies()
