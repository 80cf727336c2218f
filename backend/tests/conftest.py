"""Root conftest: shared test configuration and database fixtures.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - Fake API keys are forced before any settings are read

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for store and route tests
      (ADR: PostgreSQL-specific features not exercised here)
"""

import os

# Ensure tests don't accidentally use real API keys
os.environ.setdefault("ANTHROPIC_API_KEY", "sk-ant-test-fake-key")
os.environ.setdefault("STREAM_API_KEY", "stream-test-key")
os.environ.setdefault("STREAM_API_SECRET", "stream-test-secret")
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)

import pytest  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession, create_async_engine, async_sessionmaker,
)

from chat_relay.db.base import Base  # noqa: E402
import chat_relay.models  # noqa: E402,F401


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
