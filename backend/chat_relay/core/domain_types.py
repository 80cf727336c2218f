"""Domain Types: rich types that replace bare primitives across the codebase.

Invariants:
    - UserId is always the sanitized form of an email (see core/identity.py)
    - Exchange is immutable once built: message and reply are set exactly once
    - ChatTurn roles are limited to TurnRole values

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders (completion payloads are JSON)
    - Exchange is a frozen dataclass, decoupled from the ORM row (core never imports models/)
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import NewType, TypedDict


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", str)
ChannelId = NewType("ChannelId", str)


# ─── Enums ───────────────────────────────────────────────────────

class TurnRole(str, Enum):
    """Speaker of one turn in the reconstructed dialogue."""
    USER = "user"
    ASSISTANT = "assistant"


class DirectoryRole(str, Enum):
    """Role assigned to identities created in the chat directory."""
    USER = "user"


# ─── Value Types ─────────────────────────────────────────────────

class ChatTurn(TypedDict):
    """One message of the turn sequence sent to the completion capability."""
    role: str
    content: str


@dataclass(frozen=True)
class Exchange:
    """One user message paired with its assistant reply."""
    id: int
    user_id: UserId
    message: str
    reply: str
    created_at: datetime
