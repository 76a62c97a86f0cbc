"""Pytest configuration and fixtures."""

import sys
from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from core.config import Settings
from infrastructure.database.models import Base
from infrastructure.database.sqlalchemy_task_data_source import SQLAlchemyTasksLocalDataSource
from infrastructure.remote.in_memory_remote import InMemoryTasksRemoteDataSource


# Test database URL (SQLite in memory, one shared connection)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create a test database engine with the schema in place."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create session factory."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest.fixture
def local_source(
    session_factory: async_sessionmaker[AsyncSession],
) -> SQLAlchemyTasksLocalDataSource:
    return SQLAlchemyTasksLocalDataSource(session_factory)


@pytest.fixture
def remote_source() -> InMemoryTasksRemoteDataSource:
    """Empty remote store without latency."""
    return InMemoryTasksRemoteDataSource()


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """Settings pointing at a throwaway database file."""
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'tasks.db'}",
        remote_latency_ms=0,
        seed_remote=True,
        _env_file=None,  # type: ignore[call-arg]
    )
