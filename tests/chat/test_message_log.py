from __future__ import annotations

import pytest

from src.volunteer_hub.volunteer_hub.chat.service import MessageLog
from src.volunteer_hub.volunteer_hub.core.enums import Role
from src.volunteer_hub.volunteer_hub.core.exceptions import ValidationError


class FrozenClock:
    def __init__(self, now: int):
        self.now = now

    def __call__(self) -> int:
        return self.now


def test_messages_listed_in_posting_order_with_increasing_timestamps(store):
    log = MessageLog(store)

    posted = [log.post_message("admin", "Admin User", Role.ADMIN, text) for text in ("one", "two", "three")]
    listed = log.list_messages()

    assert [m.text for m in listed] == ["one", "two", "three"]
    assert listed == posted
    assert listed[0].timestamp < listed[1].timestamp < listed[2].timestamp


def test_same_millisecond_posts_still_get_strictly_later_timestamps(store):
    log = MessageLog(store, clock=FrozenClock(1_700_000_000_000))

    a = log.post_message("u1", "Asha", "volunteer", "hi")
    b = log.post_message("u2", "Bilal", "volunteer", "hello")

    assert a.timestamp == 1_700_000_000_000
    assert b.timestamp == a.timestamp + 1


def test_list_since_returns_only_newer_messages(store):
    clock = FrozenClock(1000)
    log = MessageLog(store, clock=clock)
    first = log.post_message("u1", "Asha", Role.VOLUNTEER, "first")
    clock.now = 2000
    second = log.post_message("u1", "Asha", Role.VOLUNTEER, "second")

    assert log.list_messages(since=first.timestamp) == [second]
    assert log.list_messages(since=second.timestamp) == []


def test_listing_is_restartable(store):
    log = MessageLog(store)
    log.post_message("u1", "Asha", Role.VOLUNTEER, "hi")

    assert log.list_messages() == log.list_messages()


def test_blank_message_is_rejected(store):
    with pytest.raises(ValidationError):
        MessageLog(store).post_message("u1", "Asha", Role.VOLUNTEER, "   ")


def test_unknown_sender_role_is_rejected(store):
    with pytest.raises(ValidationError):
        MessageLog(store).post_message("u1", "Asha", "guest", "hi")

    assert MessageLog(store).list_messages() == []
