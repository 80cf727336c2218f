"""Chat ORM: persists one message/reply exchange.

Invariants:
    - message and reply are written together in a single insert, never updated
    - (created_at, id) orders a user's exchanges; id breaks created_at ties
    - user_id is indexed: every read is scoped to one user

Design Decisions:
    - No ForeignKey to users: the store may hold orphan exchanges (no in-core referential integrity)
"""

from datetime import datetime, timezone

from sqlalchemy import String, Text, Integer, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from chat_relay.db.base import Base


class Chat(Base):
    """Exchange record - user message paired with assistant reply."""
    __tablename__ = "chats"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    user_id: Mapped[str] = mapped_column(
        String(255), nullable=False, index=True,
    )
    message: Mapped[str] = mapped_column(Text, nullable=False)
    reply: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
