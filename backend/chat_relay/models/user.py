"""User ORM: persists the store half of a user identity.

Invariants:
    - user_id is unique (sanitized email, see core/identity.py)
    - Rows are inserted once and never updated or deleted by the relay

Design Decisions:
    - Integer surrogate key + unique user_id: matches the users(userId unique, ...) contract
      while keeping joins cheap should they ever be added
"""

from datetime import datetime, timezone

from sqlalchemy import String, Integer, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from chat_relay.db.base import Base


class User(Base):
    """Registered user identity."""
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    user_id: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(320), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
