"""Unit tests for the Message aggregate."""

import pytest

from messaging.domain import Message


@pytest.fixture
def message():
    return Message(
        id="m1",
        institution_id="inst_nfsu",
        sender_id="u_rohan",
        receiver_id="u_meera",
        text="hello",
        timestamp=1_700_000_000_000,
    )


class TestMessage:
    """Tests for participant helpers."""

    def test_new_message_is_unread(self, message):
        assert message.read is False

    def test_participants_are_sender_then_receiver(self, message):
        assert message.participants == ("u_rohan", "u_meera")

    def test_involves_ignores_direction(self, message):
        assert message.involves("u_meera", "u_rohan")
        assert not message.involves("u_rohan", "u_arjun")

    def test_counterpart_of(self, message):
        assert message.counterpart_of("u_rohan") == "u_meera"
        assert message.counterpart_of("u_meera") == "u_rohan"
        assert message.counterpart_of("u_arjun") is None
