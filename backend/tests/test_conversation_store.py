from __future__ import annotations

import threading
from datetime import datetime, timedelta, timezone

import pytest

from chat_memory import MAX_HISTORY, ConversationStore, Message, NavigationAction


def _user(content: str, timestamp: datetime | None = None) -> Message:
    if timestamp is None:
        return Message(role="user", content=content)
    return Message(role="user", content=content, timestamp=timestamp)


def test_append_keeps_insertion_order_and_bound():
    store = ConversationStore()
    for index in range(MAX_HISTORY + 1):
        store.append("c1", _user(f"message {index}"))

    messages = store.get("c1")
    assert len(messages) == MAX_HISTORY
    assert messages[0].content == "message 1"
    assert messages[-1].content == f"message {MAX_HISTORY}"
    assert all("message 0" != message.content for message in messages)


def test_get_unknown_conversation_is_empty_and_returns_a_copy():
    store = ConversationStore()
    assert store.get("missing") == []

    store.append("c1", _user("hello there"))
    snapshot = store.get("c1")
    snapshot.clear()
    assert len(store.get("c1")) == 1


def test_clear_empties_only_that_conversation():
    store = ConversationStore()
    store.append("c1", _user("first"))
    store.append("c2", _user("second"))

    store.clear("c1")

    assert store.get("c1") == []
    assert [message.content for message in store.get("c2")] == ["second"]


def test_recent_window_returns_tail():
    store = ConversationStore()
    for index in range(10):
        store.append("c1", _user(f"m{index}"))

    assert [message.content for message in store.recent_window("c1", 3)] == ["m7", "m8", "m9"]
    assert store.recent_window("c1", 0) == []
    assert len(store.recent_window("c1", 100)) == 10
    assert store.recent_window("unknown", 5) == []


def test_seed_if_empty_only_seeds_once():
    store = ConversationStore()
    calls: list[int] = []

    def _welcome() -> Message:
        calls.append(1)
        return Message(role="assistant", content="Welcome")

    first = store.seed_if_empty("c1", _welcome)
    second = store.seed_if_empty("c1", _welcome)

    assert [message.content for message in first] == ["Welcome"]
    assert [message.content for message in second] == ["Welcome"]
    assert len(calls) == 1


def test_seed_if_empty_leaves_existing_history_alone():
    store = ConversationStore()
    store.append("c1", _user("already here"))

    messages = store.seed_if_empty("c1", lambda: Message(role="assistant", content="Welcome"))

    assert [message.content for message in messages] == ["already here"]


def test_timestamps_never_decrease_within_a_conversation():
    store = ConversationStore()
    later = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)
    earlier = later - timedelta(minutes=5)

    store.append("c1", _user("first", later))
    stored = store.append("c1", _user("second", earlier))

    assert stored.timestamp == later
    timestamps = [message.timestamp for message in store.get("c1")]
    assert timestamps == sorted(timestamps)


def test_concurrent_appends_are_not_lost():
    store = ConversationStore(max_history=1000)
    workers = 8
    per_worker = 50

    def _worker(worker: int) -> None:
        for index in range(per_worker):
            store.append("shared", _user(f"w{worker}-{index}"))

    threads = [threading.Thread(target=_worker, args=(worker,)) for worker in range(workers)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    messages = store.get("shared")
    assert len(messages) == workers * per_worker
    for worker in range(workers):
        own = [message.content for message in messages if message.content.startswith(f"w{worker}-")]
        assert own == [f"w{worker}-{index}" for index in range(per_worker)]


def test_concurrent_appends_respect_bound():
    store = ConversationStore()

    def _worker() -> None:
        for index in range(40):
            store.append("shared", _user(f"m{index}"))

    threads = [threading.Thread(target=_worker) for _ in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(store.get("shared")) == MAX_HISTORY


def test_conversation_ids_lists_known_conversations():
    store = ConversationStore()
    store.append("b", _user("one"))
    store.append("a", _user("two"))
    assert store.conversation_ids() == ["a", "b"]


def test_max_history_must_be_positive():
    with pytest.raises(ValueError):
        ConversationStore(max_history=0)


def test_message_validation():
    with pytest.raises(ValueError):
        Message(role="user", content="   ")
    with pytest.raises(ValueError):
        Message(role="system", content="hello")
    with pytest.raises(ValueError):
        Message(role="user", content="go", navigation_action=NavigationAction(target="dashboard"))


def test_message_as_dict_shape():
    moment = datetime(2026, 10, 19, 9, 30, tzinfo=timezone.utc)
    plain = Message(role="user", content="hello", timestamp=moment).as_dict()
    assert set(plain) == {"role", "content", "timestamp"}
    assert datetime.fromisoformat(plain["timestamp"]) == moment

    navigating = Message(
        role="assistant",
        content="Opening the dashboard.",
        timestamp=moment,
        navigation_action=NavigationAction(target="dashboard"),
    ).as_dict()
    assert navigating["navigationAction"] == {"type": "navigate", "target": "dashboard"}
