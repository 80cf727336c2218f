"""Route Dependencies: wire process-wide capabilities and per-request sessions into services.

Invariants:
    - Capability handles (completion client, chat gateway) live on app.state, created once
      in the lifespan and never re-created per request
    - Store adapters are per-request: they wrap the request's AsyncSession
    - Services are assembled fresh per request and hold no state between requests

Design Decisions:
    - FastAPI Depends over module globals: tests replace get_completion_client /
      get_chat_gateway through app.dependency_overrides
"""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from chat_relay.infrastructure.anthropic_client import AnthropicCompletionClient
from chat_relay.infrastructure.database import get_db
from chat_relay.infrastructure.repositories import SqlHistoryStore, SqlUserStore
from chat_relay.infrastructure.stream_chat_client import StreamChatGateway
from chat_relay.services.conversation_orchestrator import ConversationOrchestrator
from chat_relay.services.registration import RegistrationHandler


def get_completion_client(request: Request) -> AnthropicCompletionClient:
    return request.app.state.completion_client


def get_chat_gateway(request: Request) -> StreamChatGateway:
    return request.app.state.chat_gateway


def get_history_store(db: AsyncSession = Depends(get_db)) -> SqlHistoryStore:
    return SqlHistoryStore(db)


def get_registration_handler(
    db: AsyncSession = Depends(get_db),
    gateway: StreamChatGateway = Depends(get_chat_gateway),
) -> RegistrationHandler:
    return RegistrationHandler(directory=gateway, store=SqlUserStore(db))


def get_orchestrator(
    db: AsyncSession = Depends(get_db),
    gateway: StreamChatGateway = Depends(get_chat_gateway),
    completion: AnthropicCompletionClient = Depends(get_completion_client),
) -> ConversationOrchestrator:
    return ConversationOrchestrator(
        directory=gateway,
        users=SqlUserStore(db),
        history=SqlHistoryStore(db),
        completion=completion,
        delivery=gateway,
    )
