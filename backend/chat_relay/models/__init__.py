"""ORM Models: SQLAlchemy declarative models for users and chat exchanges.

Invariants:
    - All models inherit from Base (db/base.py)
    - No foreign key from chats to users: orphan exchange rows are tolerated

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete before create_all/autogenerate
"""

from chat_relay.models.user import User  # noqa: F401
from chat_relay.models.chat import Chat  # noqa: F401
