"""Registration Handler: idempotently ensures a user identity in directory and store.

Invariants:
    - userId is derived from email only (core/identity.py)
    - Directory and store are each checked by existence query before any write
    - Calling register twice with the same email creates nothing the second time
    - Returns the canonical identity whether it was just created or already existed

Design Decisions:
    - No rollback across sides: a directory write followed by a failed store write leaves
      the directory updated. Both sides re-check on retry, so a retry converges.
    - Capabilities injected (UserDirectory, UserStore): tests pass fakes, routes pass adapters
"""

import logging
from dataclasses import dataclass

from chat_relay.core.conversation import require_fields
from chat_relay.core.domain_types import DirectoryRole, UserId
from chat_relay.core.identity import derive_user_id
from chat_relay.core.repository_protocols import UserDirectory, UserStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RegisteredUser:
    user_id: UserId
    name: str
    email: str


class RegistrationHandler:
    """Ensures a user exists in both the chat directory and the store."""

    def __init__(self, directory: UserDirectory, store: UserStore):
        self.directory = directory
        self.store = store

    async def register(self, name: str | None, email: str | None) -> RegisteredUser:
        fields = require_fields(
            "Name and email are required", name=name, email=email,
        )
        name, email = fields["name"], fields["email"]
        user_id = derive_user_id(email)

        if not await self.directory.user_exists(user_id):
            await self.directory.upsert_user(
                user_id, name, email, DirectoryRole.USER.value,
            )

        if not await self.store.exists(user_id):
            logger.info(
                f"User {user_id} does not exist in the store, adding",
                extra={"user_id": user_id},
            )
            await self.store.insert(user_id, name, email)

        return RegisteredUser(user_id=user_id, name=name, email=email)
