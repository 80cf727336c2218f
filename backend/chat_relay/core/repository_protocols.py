"""Boundary Protocols: contracts between core and shell.

Invariants:
    - Core NEVER imports from shell - dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection
    - Every implementation raises an UpstreamError subclass on capability failure

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: boundary methods are async because implementations do IO;
      services await them around the pure functions in core/conversation.py
"""

from collections.abc import Sequence
from typing import Protocol

from chat_relay.core.domain_types import ChatTurn, Exchange, UserId


class UserDirectory(Protocol):
    """Contract for the chat provider's user registry."""
    async def user_exists(self, user_id: UserId) -> bool: ...
    async def upsert_user(
        self, user_id: UserId, name: str, email: str, role: str,
    ) -> None: ...


class DeliveryChannel(Protocol):
    """Contract for publishing replies into a real-time channel."""
    async def ensure_channel(self, channel_key: str, metadata: dict) -> None: ...
    async def publish(self, channel_key: str, author_id: str, text: str) -> None: ...


class CompletionClient(Protocol):
    """Contract for the language-model completion capability."""
    async def complete(self, turns: Sequence[ChatTurn]) -> str | None: ...


class UserStore(Protocol):
    """Contract for user identity persistence - implemented by shell."""
    async def exists(self, user_id: UserId) -> bool: ...
    async def insert(self, user_id: UserId, name: str, email: str) -> None: ...


class HistoryStore(Protocol):
    """Contract for exchange persistence - implemented by shell."""
    async def load_recent(self, user_id: UserId, limit: int) -> list[Exchange]: ...
    async def load_all(self, user_id: UserId) -> list[Exchange]: ...
    async def append(
        self, user_id: UserId, message: str, reply: str,
    ) -> Exchange: ...
