"""Identity Derivation: verifies userId sanitization and channel naming.

Tests:
    - Disallowed characters become "_", allowed ones pass through
    - Derivation is deterministic (pure function of email)
    - Emails differing only in disallowed characters collide (documented limitation)
"""

from chat_relay.core.identity import channel_id_for, derive_user_id


def test_email_sanitized_to_user_id():
    assert derive_user_id("ada@x.com") == "ada_x_com"


def test_allowed_characters_pass_through():
    assert derive_user_id("Ada_Love-1") == "Ada_Love-1"


def test_each_disallowed_character_becomes_one_underscore():
    assert derive_user_id("a+b c@d.e") == "a_b_c_d_e"
    assert derive_user_id("é@x.io") == "__x_io"


def test_derivation_is_deterministic():
    assert derive_user_id("grace@navy.mil") == derive_user_id("grace@navy.mil")


def test_distinct_emails_can_collide():
    assert derive_user_id("a.b@x.com") == derive_user_id("a+b@x.com")
    assert derive_user_id("a.b@x.com") == derive_user_id("a_b@x.com")


def test_channel_id_is_prefixed_user_id():
    assert channel_id_for("ada_x_com") == "chat-ada_x_com"
