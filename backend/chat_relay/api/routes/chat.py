"""Chat Routes: POST /chat (one conversation turn) and POST /get-messages (history).

Invariants:
    - /chat responds only after the exchange is persisted
    - /chat maps unknown users to 404 (directory or store), upstream failures to 500
    - /get-messages returns {messages: []} for a user with no history

Design Decisions:
    - Error mapping lives in the global handlers (api/error_handlers.py); routes just raise
"""

import logging

from fastapi import APIRouter, Depends

from chat_relay.api.dependencies import get_history_store, get_orchestrator
from chat_relay.infrastructure.repositories import SqlHistoryStore
from chat_relay.schemas.chat import (
    ChatRequest,
    ChatResponse,
    ExchangeOut,
    GetMessagesRequest,
    MessagesResponse,
)
from chat_relay.services.conversation_orchestrator import ConversationOrchestrator
from chat_relay.services.history import list_messages

logger = logging.getLogger(__name__)
router = APIRouter(tags=["chat"])


@router.post("/chat", response_model=ChatResponse)
async def chat(
    body: ChatRequest,
    orchestrator: ConversationOrchestrator = Depends(get_orchestrator),
):
    """Run one user message through the assistant and return its reply."""
    result = await orchestrator.converse(body.user_id, body.message)
    return ChatResponse(reply=result.reply)


@router.post("/get-messages", response_model=MessagesResponse)
async def get_messages(
    body: GetMessagesRequest,
    history: SqlHistoryStore = Depends(get_history_store),
):
    """Return every stored exchange for the user, oldest first."""
    exchanges = await list_messages(history, body.user_id)
    return MessagesResponse(
        messages=[ExchangeOut.from_exchange(e) for e in exchanges],
    )
