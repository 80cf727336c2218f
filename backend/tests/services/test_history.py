"""Message History: list_messages validation and empty-history behavior."""

import pytest

from chat_relay.core.errors import ValidationError
from chat_relay.services.history import list_messages


async def test_no_history_is_empty_list(history_store):
    assert await list_messages(history_store, "nobody") == []


async def test_lists_all_exchanges_oldest_first(history_store):
    for i in range(12):
        await history_store.append("ada_x_com", f"m{i}", f"r{i}")

    exchanges = await list_messages(history_store, "ada_x_com")

    assert [e.message for e in exchanges] == [f"m{i}" for i in range(12)]


@pytest.mark.parametrize("user_id", [None, "", " "])
async def test_blank_user_id_rejected(history_store, user_id):
    with pytest.raises(ValidationError):
        await list_messages(history_store, user_id)
