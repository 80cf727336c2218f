"""Message History: read side of the exchange log for /get-messages.

Invariants:
    - Blank userId raises ValidationError before any store access
    - A user with no exchanges gets an empty list, never an error
    - No existence check: unknown users simply have no history
"""

from chat_relay.core.conversation import require_fields
from chat_relay.core.domain_types import Exchange, UserId
from chat_relay.core.repository_protocols import HistoryStore


async def list_messages(history: HistoryStore, user_id: str | None) -> list[Exchange]:
    """All exchanges for user_id, oldest first."""
    fields = require_fields("User ID is required", user_id=user_id)
    return await history.load_all(UserId(fields["user_id"]))
