"""Service test fixtures: fake capabilities plus SQLite-backed store adapters.

Invariants:
    - Store adapters share the per-test session (test_db)
    - Chat provider and completion client are in-memory fakes (tests/fakes.py)
"""

import pytest

from chat_relay.infrastructure.repositories import SqlHistoryStore, SqlUserStore
from chat_relay.services.conversation_orchestrator import ConversationOrchestrator
from chat_relay.services.registration import RegistrationHandler

from tests.fakes import FakeChatProvider, FakeCompletionClient


@pytest.fixture
def fake_chat():
    return FakeChatProvider()


@pytest.fixture
def fake_completion():
    return FakeCompletionClient("hi there")


@pytest.fixture
def user_store(test_db):
    return SqlUserStore(test_db)


@pytest.fixture
def history_store(test_db):
    return SqlHistoryStore(test_db)


@pytest.fixture
def registration(fake_chat, user_store):
    return RegistrationHandler(directory=fake_chat, store=user_store)


@pytest.fixture
def orchestrator(fake_chat, user_store, history_store, fake_completion):
    return ConversationOrchestrator(
        directory=fake_chat,
        users=user_store,
        history=history_store,
        completion=fake_completion,
        delivery=fake_chat,
    )


@pytest.fixture
async def ada(registration):
    """Ada registered in both directory and store."""
    return await registration.register("Ada", "ada@x.com")
