"""Conversation Building: pure functions that turn stored history into a completion prompt.

Invariants:
    - HISTORY_LIMIT bounds the prompt: at most 10 prior exchanges, never configurable per call
    - build_turns preserves chronological order: user, assistant, user, assistant, ..., user
    - The incoming message is always the final user turn
    - resolve_reply never returns an empty string

Design Decisions:
    - Full turn sequence goes to the completion capability (history is the point of loading it)
    - Pure functions, no IO: the orchestrator in services/ wraps them with the async calls
"""

from collections.abc import Sequence

from chat_relay.core.domain_types import ChatTurn, Exchange, TurnRole
from chat_relay.core.errors import ErrorContext, ValidationError

HISTORY_LIMIT = 10
FALLBACK_REPLY = "No response from AI"
AI_BOT_ID = "ai_bot"
CHANNEL_TYPE = "messaging"
CHANNEL_NAME = "AI Chat"


def require_fields(
    message: str, context: ErrorContext | None = None, /, **values: str | None,
) -> dict[str, str]:
    """Return values unchanged, or raise if any is missing or whitespace-only."""
    missing = [
        name for name, value in values.items()
        if value is None or not str(value).strip()
    ]
    if missing:
        raise ValidationError(message, fields=missing, context=context)
    return {name: str(value) for name, value in values.items()}


def build_turns(history: Sequence[Exchange], message: str) -> list[ChatTurn]:
    """Expand oldest-first history into alternating turns, then append message."""
    turns: list[ChatTurn] = []
    for exchange in history:
        turns.append({"role": TurnRole.USER.value, "content": exchange.message})
        turns.append({"role": TurnRole.ASSISTANT.value, "content": exchange.reply})
    turns.append({"role": TurnRole.USER.value, "content": message})
    return turns


def resolve_reply(text: str | None) -> str:
    """Completion output, or the fallback placeholder when it is empty."""
    if text is None or not text.strip():
        return FALLBACK_REPLY
    return text


def channel_metadata() -> dict:
    """Creation data for a user's AI channel."""
    return {"name": CHANNEL_NAME, "created_by_id": AI_BOT_ID}
