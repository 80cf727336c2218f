"""Store Adapters: SQLAlchemy implementations of UserStore and HistoryStore.

Invariants:
    - Every read is scoped to one user_id
    - load_recent returns the newest `limit` exchanges, reordered oldest-first
    - append commits message and reply in one insert and returns the stored Exchange
    - Any SQLAlchemy failure surfaces as DatabaseError (via map_db_errors)

Design Decisions:
    - Adapters receive the request's AsyncSession: one session per request, no shared state
    - ORM rows converted to core Exchange before leaving this module (core never sees models/)
    - (created_at, id) ordering: id breaks ties when two inserts share a timestamp
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from chat_relay.core.domain_types import Exchange, UserId
from chat_relay.infrastructure.database import map_db_errors
from chat_relay.models.chat import Chat
from chat_relay.models.user import User

logger = logging.getLogger(__name__)


def _to_exchange(row: Chat) -> Exchange:
    return Exchange(
        id=row.id,
        user_id=UserId(row.user_id),
        message=row.message,
        reply=row.reply,
        created_at=row.created_at,
    )


class SqlUserStore:
    """User identity persistence backed by the users table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def exists(self, user_id: UserId) -> bool:
        async with map_db_errors(self.db, "select_user"):
            result = await self.db.execute(
                select(User.id).where(User.user_id == user_id),
            )
            return result.first() is not None

    async def insert(self, user_id: UserId, name: str, email: str) -> None:
        async with map_db_errors(self.db, "insert_user"):
            self.db.add(User(user_id=user_id, name=name, email=email))
            await self.db.commit()


class SqlHistoryStore:
    """Exchange persistence backed by the chats table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def load_recent(self, user_id: UserId, limit: int) -> list[Exchange]:
        """Newest `limit` exchanges for user, oldest first."""
        async with map_db_errors(self.db, "select_history"):
            result = await self.db.execute(
                select(Chat)
                .where(Chat.user_id == user_id)
                .order_by(Chat.created_at.desc(), Chat.id.desc())
                .limit(limit)
            )
            rows = result.scalars().all()
        return [_to_exchange(row) for row in reversed(rows)]

    async def load_all(self, user_id: UserId) -> list[Exchange]:
        async with map_db_errors(self.db, "select_history"):
            result = await self.db.execute(
                select(Chat)
                .where(Chat.user_id == user_id)
                .order_by(Chat.created_at.asc(), Chat.id.asc())
            )
            rows = result.scalars().all()
        return [_to_exchange(row) for row in rows]

    async def append(
        self, user_id: UserId, message: str, reply: str,
    ) -> Exchange:
        async with map_db_errors(self.db, "insert_chat"):
            row = Chat(user_id=user_id, message=message, reply=reply)
            self.db.add(row)
            await self.db.commit()
            await self.db.refresh(row)
        logger.info(
            "Exchange persisted",
            extra={"user_id": user_id, "operation": "insert_chat"},
        )
        return _to_exchange(row)
