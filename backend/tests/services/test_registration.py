"""Registration Handler: idempotent identity creation in directory and store.

Invariants:
    - Same email twice → same userId, one directory upsert, one store row
    - Existing identities on either side are left untouched
    - Blank name/email rejected before any capability call
    - Directory failure surfaces as UpstreamError; no rollback of the other side
"""

import pytest
from sqlalchemy import func, select

from chat_relay.core.errors import DatabaseError, UpstreamError, ValidationError
from chat_relay.models.user import User


async def _user_rows(test_db):
    result = await test_db.execute(select(func.count()).select_from(User))
    return result.scalar_one()


async def test_register_returns_canonical_identity(registration):
    user = await registration.register("Ada", "ada@x.com")

    assert user.user_id == "ada_x_com"
    assert user.name == "Ada"
    assert user.email == "ada@x.com"


async def test_register_creates_directory_user_with_user_role(registration, fake_chat):
    await registration.register("Ada", "ada@x.com")

    assert fake_chat.users["ada_x_com"] == {
        "name": "Ada", "email": "ada@x.com", "role": "user",
    }


async def test_register_twice_is_idempotent(registration, fake_chat, test_db):
    first = await registration.register("Ada", "ada@x.com")
    second = await registration.register("Ada", "ada@x.com")

    assert first.user_id == second.user_id
    assert fake_chat.upsert_calls == 1
    assert await _user_rows(test_db) == 1


async def test_existing_directory_user_not_upserted(registration, fake_chat, user_store):
    fake_chat.users["ada_x_com"] = {"name": "Ada", "email": "ada@x.com", "role": "user"}

    await registration.register("Ada", "ada@x.com")

    assert fake_chat.upsert_calls == 0
    assert await user_store.exists("ada_x_com")


async def test_existing_store_user_not_duplicated(registration, user_store, test_db):
    await user_store.insert("ada_x_com", "Ada", "ada@x.com")

    await registration.register("Ada", "ada@x.com")

    assert await _user_rows(test_db) == 1


async def test_colliding_emails_share_one_identity(registration, fake_chat, test_db):
    a = await registration.register("A", "a.b@x.com")
    b = await registration.register("B", "a+b@x.com")

    assert a.user_id == b.user_id == "a_b_x_com"
    assert fake_chat.upsert_calls == 1
    assert await _user_rows(test_db) == 1


@pytest.mark.parametrize("name,email", [
    (None, "ada@x.com"), ("Ada", None), ("", "ada@x.com"), ("Ada", "   "),
])
async def test_missing_fields_rejected(registration, fake_chat, name, email):
    with pytest.raises(ValidationError):
        await registration.register(name, email)

    assert fake_chat.upsert_calls == 0


async def test_directory_failure_is_upstream_error(registration, fake_chat, test_db):
    fake_chat.failing.add("query_users")

    with pytest.raises(UpstreamError):
        await registration.register("Ada", "ada@x.com")

    assert await _user_rows(test_db) == 0


async def test_store_failure_leaves_directory_updated(registration, fake_chat, user_store):
    async def _broken_insert(user_id, name, email):
        raise DatabaseError("unreachable", "insert_user")

    user_store.insert = _broken_insert

    with pytest.raises(UpstreamError):
        await registration.register("Ada", "ada@x.com")

    assert "ada_x_com" in fake_chat.users
