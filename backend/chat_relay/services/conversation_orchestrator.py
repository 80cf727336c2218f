"""Conversation Orchestrator: turns one incoming message into a persisted, delivered reply.

Invariants:
    - Preconditions checked in order, first failure wins: fields, directory, store
    - Nothing is written and nothing is published before all preconditions pass
    - Completion sees at most HISTORY_LIMIT prior exchanges, oldest first, then the new message
    - A reply is returned only after its exchange is persisted
    - Persisted reply is never empty (FALLBACK_REPLY substitutes)

Design Decisions:
    - Delivery is best-effort: once the exchange is durable, a channel failure is logged
      (ERROR, with error code) and the reply is still returned. No compensating action.
    - No per-user serialization: concurrent calls for one user may interleave history
      reads and writes (accepted gap; conversations are low-concurrency per user)
    - No retries: any upstream failure before persistence propagates as UpstreamError
"""

import logging
from dataclasses import dataclass

from chat_relay.core.conversation import (
    AI_BOT_ID,
    HISTORY_LIMIT,
    build_turns,
    channel_metadata,
    require_fields,
    resolve_reply,
)
from chat_relay.core.domain_types import Exchange, UserId
from chat_relay.core.errors import ErrorContext, NotFoundError, UpstreamError
from chat_relay.core.identity import channel_id_for
from chat_relay.core.repository_protocols import (
    CompletionClient,
    DeliveryChannel,
    HistoryStore,
    UserDirectory,
    UserStore,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConversationResult:
    reply: str
    exchange: Exchange
    delivered: bool


class ConversationOrchestrator:
    """Runs the validate → history → complete → persist → deliver chain."""

    def __init__(
        self,
        directory: UserDirectory,
        users: UserStore,
        history: HistoryStore,
        completion: CompletionClient,
        delivery: DeliveryChannel,
    ):
        self.directory = directory
        self.users = users
        self.history = history
        self.completion = completion
        self.delivery = delivery

    async def converse(
        self, user_id: str | None, message: str | None,
    ) -> ConversationResult:
        fields = require_fields(
            "User ID and message are required",
            user_id=user_id, message=message,
        )
        uid = UserId(fields["user_id"])
        text = fields["message"]
        context = ErrorContext(user_id=uid, operation="converse")

        if not await self.directory.user_exists(uid):
            raise NotFoundError("user not found", context=context)
        if not await self.users.exists(uid):
            raise NotFoundError("user not registered in store", context=context)

        recent = await self.history.load_recent(uid, HISTORY_LIMIT)
        turns = build_turns(recent, text)
        reply = resolve_reply(await self.completion.complete(turns))

        exchange = await self.history.append(uid, text, reply)
        delivered = await self._deliver(uid, reply)
        return ConversationResult(reply=reply, exchange=exchange, delivered=delivered)

    async def _deliver(self, user_id: UserId, reply: str) -> bool:
        """Publish reply into the user's channel; failures are logged, not raised."""
        channel_key = channel_id_for(user_id)
        try:
            await self.delivery.ensure_channel(channel_key, channel_metadata())
            await self.delivery.publish(channel_key, AI_BOT_ID, reply)
        except UpstreamError as e:
            logger.error(
                f"Reply delivery failed for {channel_key}: {e.message}",
                extra={"user_id": user_id, "error_code": e.code},
            )
            return False
        return True
