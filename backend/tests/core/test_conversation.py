"""Conversation Building: pure tests for turn construction and reply fallback.

Tests cover:
    - build_turns: alternating user/assistant turns, new message last
    - resolve_reply: fallback on None/empty/whitespace
    - require_fields: blank detection, values returned unchanged
"""

from datetime import datetime, timezone

import pytest

from chat_relay.core.conversation import (
    AI_BOT_ID,
    FALLBACK_REPLY,
    HISTORY_LIMIT,
    build_turns,
    channel_metadata,
    require_fields,
    resolve_reply,
)
from chat_relay.core.domain_types import Exchange, UserId
from chat_relay.core.errors import ValidationError


def _exchange(i: int) -> Exchange:
    return Exchange(
        id=i,
        user_id=UserId("ada_x_com"),
        message=f"question {i}",
        reply=f"answer {i}",
        created_at=datetime(2026, 1, 1, 12, i, tzinfo=timezone.utc),
    )


def test_history_limit_is_ten():
    assert HISTORY_LIMIT == 10


def test_build_turns_without_history_is_single_user_turn():
    assert build_turns([], "hello") == [{"role": "user", "content": "hello"}]


def test_build_turns_expands_each_exchange_into_two_turns():
    turns = build_turns([_exchange(1), _exchange(2)], "next")

    assert turns == [
        {"role": "user", "content": "question 1"},
        {"role": "assistant", "content": "answer 1"},
        {"role": "user", "content": "question 2"},
        {"role": "assistant", "content": "answer 2"},
        {"role": "user", "content": "next"},
    ]


def test_build_turns_alternates_roles():
    turns = build_turns([_exchange(i) for i in range(5)], "last")
    roles = [t["role"] for t in turns]
    assert roles == ["user", "assistant"] * 5 + ["user"]


@pytest.mark.parametrize("empty", [None, "", "   \n"])
def test_resolve_reply_falls_back_on_empty(empty):
    assert resolve_reply(empty) == FALLBACK_REPLY


def test_resolve_reply_keeps_text():
    assert resolve_reply("hi there") == "hi there"


def test_require_fields_returns_values_unchanged():
    assert require_fields("msg", a=" x ", b="y") == {"a": " x ", "b": "y"}


def test_require_fields_reports_every_blank_field():
    with pytest.raises(ValidationError) as exc_info:
        require_fields("Name and email are required", name="", email=None)

    assert exc_info.value.fields == ["name", "email"]
    assert exc_info.value.http_status == 400
    assert exc_info.value.message == "Name and email are required"


def test_channel_metadata_names_bot_as_creator():
    assert channel_metadata() == {"name": "AI Chat", "created_by_id": AI_BOT_ID}
