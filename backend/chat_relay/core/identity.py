"""Identity Derivation: pure mapping from contact address to user and channel ids.

Invariants:
    - derive_user_id is a pure function of the email string
    - Every character outside [A-Za-z0-9_-] becomes exactly one "_"
    - channel_id_for is deterministic: one channel per user

Design Decisions:
    - No uniqueness guarantee: "a.b@x.com" and "a_b@x.com" collapse to the same id.
      Documented limitation; the directory and the store treat them as one identity.
"""

import re

from chat_relay.core.domain_types import ChannelId, UserId

_DISALLOWED = re.compile(r"[^A-Za-z0-9_-]")

CHANNEL_PREFIX = "chat-"


def derive_user_id(email: str) -> UserId:
    """Sanitize an email into a directory-safe user id."""
    return UserId(_DISALLOWED.sub("_", email))


def channel_id_for(user_id: str) -> ChannelId:
    return ChannelId(f"{CHANNEL_PREFIX}{user_id}")
