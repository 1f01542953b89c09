from __future__ import annotations

import threading
from collections.abc import Callable
from dataclasses import replace

from .models import Message


MAX_HISTORY = 50


class ConversationStore:
    """In-process conversation log keyed by caller-supplied conversation id.

    Conversations are created on first reference and live for the lifetime of
    the store. Every mutation of a single conversation runs under that
    conversation's lock, so a concurrent append cannot be lost while another
    request is evicting from the front.
    """

    def __init__(self, max_history: int = MAX_HISTORY) -> None:
        if max_history < 1:
            raise ValueError("max_history must be positive")
        self.max_history = max_history
        self._conversations: dict[str, list[Message]] = {}
        self._locks: dict[str, threading.Lock] = {}
        self._registry_lock = threading.Lock()

    def _lock_for(self, conversation_id: str) -> threading.Lock:
        with self._registry_lock:
            lock = self._locks.get(conversation_id)
            if lock is None:
                lock = threading.Lock()
                self._locks[conversation_id] = lock
            return lock

    def append(self, conversation_id: str, message: Message) -> Message:
        """Append ``message`` and evict the oldest entries beyond the bound.

        Returns the stored message; its timestamp is clamped so timestamps never
        decrease within a conversation.
        """
        with self._lock_for(conversation_id):
            messages = self._conversations.setdefault(conversation_id, [])
            if messages and message.timestamp < messages[-1].timestamp:
                message = replace(message, timestamp=messages[-1].timestamp)
            messages.append(message)
            overflow = len(messages) - self.max_history
            if overflow > 0:
                del messages[:overflow]
            return message

    def get(self, conversation_id: str) -> list[Message]:
        with self._lock_for(conversation_id):
            return list(self._conversations.get(conversation_id, []))

    def seed_if_empty(self, conversation_id: str, factory: Callable[[], Message]) -> list[Message]:
        # Read with a side effect: an empty conversation is initialised with the
        # message built by ``factory``. Only the first caller seeds.
        with self._lock_for(conversation_id):
            messages = self._conversations.setdefault(conversation_id, [])
            if not messages:
                messages.append(factory())
            return list(messages)

    def clear(self, conversation_id: str) -> None:
        with self._lock_for(conversation_id):
            self._conversations[conversation_id] = []

    def recent_window(self, conversation_id: str, n: int) -> list[Message]:
        if n <= 0:
            return []
        with self._lock_for(conversation_id):
            return list(self._conversations.get(conversation_id, [])[-n:])

    def conversation_ids(self) -> list[str]:
        with self._registry_lock:
            return sorted(self._conversations.keys())
