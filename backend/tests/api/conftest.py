"""Route test fixtures: FastAPI test client with DB and capabilities overridden.

Invariants:
    - get_db overridden to use the per-test SQLite session factory
    - Completion client and chat gateway replaced by fakes via dependency_overrides
    - db_manager patched so the readiness probe sees the test engine

Design Decisions:
    - ASGITransport does not run the lifespan: no real Anthropic/Stream clients are built
"""

import pytest
from httpx import ASGITransport, AsyncClient

import chat_relay.infrastructure.database as db_module
from chat_relay.api.dependencies import get_chat_gateway, get_completion_client
from chat_relay.infrastructure.database import DatabaseSessionManager, get_db
from chat_relay.main import app

from tests.fakes import FakeChatProvider, FakeCompletionClient


@pytest.fixture
def fake_chat():
    return FakeChatProvider()


@pytest.fixture
def fake_completion():
    return FakeCompletionClient("hi there")


@pytest.fixture
async def client(test_engine, test_session_factory, fake_chat, fake_completion):
    """FastAPI test client with DB and capability dependencies overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_chat_gateway] = lambda: fake_chat
    app.dependency_overrides[get_completion_client] = lambda: fake_completion

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
async def registered_ada(client):
    res = await client.post(
        "/register-user", json={"name": "Ada", "email": "ada@x.com"},
    )
    assert res.status_code == 200
    return res.json()["userId"]
