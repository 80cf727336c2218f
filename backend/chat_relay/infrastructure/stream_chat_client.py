"""Stream Chat Gateway: directory and delivery adapter over the Stream Chat async SDK.

Invariants:
    - user_exists uses an existence query, never a duplicate-create error
    - ensure_channel is create-or-noop (Stream's channel create is a get-or-create)
    - publish posts exactly one message authored by author_id
    - All SDK/transport failures mapped to ChatProviderError (core/errors.py); no retries

Design Decisions:
    - One gateway implements both UserDirectory and DeliveryChannel: they share one
      long-lived StreamChatAsync handle created in the FastAPI lifespan
    - Channel type fixed per gateway ("messaging"); channel_key is the channel id
"""

import logging

from stream_chat import StreamChatAsync
from stream_chat.base.exceptions import StreamAPIException

from chat_relay.core.domain_types import UserId
from chat_relay.core.errors import ChatProviderError, ErrorContext

logger = logging.getLogger(__name__)


class StreamChatGateway:
    """Chat directory + channel delivery backed by Stream Chat."""

    def __init__(
        self,
        api_key: str,
        api_secret: str,
        timeout_seconds: float = 6.0,
        channel_type: str = "messaging",
        client: StreamChatAsync | None = None,
    ):
        self.client = client or StreamChatAsync(
            api_key=api_key, api_secret=api_secret, timeout=timeout_seconds,
        )
        self.channel_type = channel_type

    async def user_exists(self, user_id: UserId) -> bool:
        response = await self._call(
            "query_users",
            self.client.query_users({"id": {"$eq": user_id}}),
            user_id=user_id,
        )
        return bool(response.get("users"))

    async def upsert_user(
        self, user_id: UserId, name: str, email: str, role: str,
    ) -> None:
        await self._call(
            "upsert_user",
            self.client.upsert_user({
                "id": user_id, "name": name, "email": email, "role": role,
            }),
            user_id=user_id,
        )
        logger.info(
            "Chat directory user created",
            extra={"user_id": user_id, "operation": "upsert_user"},
        )

    async def ensure_channel(self, channel_key: str, metadata: dict) -> None:
        data = dict(metadata)
        created_by = data.pop("created_by_id")
        channel = self.client.channel(self.channel_type, channel_key, data)
        await self._call("create_channel", channel.create(created_by))

    async def publish(self, channel_key: str, author_id: str, text: str) -> None:
        channel = self.client.channel(self.channel_type, channel_key)
        await self._call(
            "send_message", channel.send_message({"text": text}, author_id),
        )

    async def close(self) -> None:
        await self.client.close()

    async def _call(self, operation: str, awaitable, user_id: str | None = None):
        """Await one SDK call, mapping every failure to ChatProviderError."""
        context = ErrorContext(user_id=user_id, operation=operation)
        try:
            return await awaitable
        except StreamAPIException as e:
            raise ChatProviderError(str(e), operation, context=context) from e
        except Exception as e:
            logger.error(
                f"Unexpected Stream Chat error during {operation}: {e}",
                exc_info=True,
            )
            raise ChatProviderError(str(e), operation, context=context) from e
