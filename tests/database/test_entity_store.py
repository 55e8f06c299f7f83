from __future__ import annotations

import pytest

from src.volunteer_hub.volunteer_hub.core.enums import Collection
from src.volunteer_hub.volunteer_hub.core.exceptions import StoreError, ValidationError
from src.volunteer_hub.volunteer_hub.database.memory_store import InMemoryEntityStore


def test_read_missing_collection_returns_empty_default():
    store = InMemoryEntityStore()

    assert store.read(Collection.USERS) == []
    assert store.read(Collection.EVENTS) == []
    assert store.read(Collection.EVENT_PHOTOS) == []
    assert store.read(Collection.CHAT_MESSAGES) == []
    assert store.read(Collection.ATTENDANCE) == {}


def test_read_accepts_stored_collection_names():
    store = InMemoryEntityStore()
    store.write("chatMessages", [{"id": "m1"}])

    assert store.read(Collection.CHAT_MESSAGES) == [{"id": "m1"}]


def test_unknown_collection_is_rejected():
    store = InMemoryEntityStore()

    with pytest.raises(ValidationError):
        store.read("sessions")


def test_read_returns_a_copy():
    store = InMemoryEntityStore()
    store.write(Collection.EVENTS, [{"id": "e1"}])

    events = store.read(Collection.EVENTS)
    events.append({"id": "e2"})

    assert store.read(Collection.EVENTS) == [{"id": "e1"}]


def test_transaction_commits_staged_writes_on_exit():
    store = InMemoryEntityStore()

    with store.transaction(Collection.EVENTS, Collection.ATTENDANCE) as tx:
        tx.write(Collection.EVENTS, [{"id": "e1"}])
        tx.write(Collection.ATTENDANCE, {"e1": {}})
        assert tx.read(Collection.EVENTS) == [{"id": "e1"}]
        # not visible outside before commit
        assert store.read(Collection.EVENTS) == []

    assert store.read(Collection.EVENTS) == [{"id": "e1"}]
    assert store.read(Collection.ATTENDANCE) == {"e1": {}}


def test_transaction_discards_writes_when_block_raises():
    store = InMemoryEntityStore({"events": [{"id": "e1"}]})

    with pytest.raises(RuntimeError):
        with store.transaction(Collection.EVENTS) as tx:
            tx.write(Collection.EVENTS, [])
            raise RuntimeError("boom")

    assert store.read(Collection.EVENTS) == [{"id": "e1"}]


def test_transaction_cannot_touch_unlocked_collection():
    store = InMemoryEntityStore()

    with pytest.raises(StoreError):
        with store.transaction(Collection.EVENTS) as tx:
            tx.write(Collection.USERS, [])


def test_has_reports_whether_collection_was_ever_written():
    store = InMemoryEntityStore({"users": []})

    with store.transaction(Collection.USERS, Collection.EVENTS) as tx:
        assert tx.has(Collection.USERS) is True
        assert tx.has(Collection.EVENTS) is False
        tx.write(Collection.EVENTS, [])
        assert tx.has(Collection.EVENTS) is True
