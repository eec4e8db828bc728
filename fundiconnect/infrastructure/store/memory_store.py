from __future__ import annotations

import threading
from collections import OrderedDict

from fundiconnect.application.ports.session_store import SessionStorePort
from fundiconnect.domain.entities.session import ConversationSession


class MemorySessionStore(SessionStorePort):
    """Process-local sessions. Lost on restart, no expiry."""

    def __init__(self, processed_limit: int = 5000) -> None:
        self._sessions: dict[str, ConversationSession] = {}
        self._processed: OrderedDict[str, None] = OrderedDict()
        self._processed_limit = processed_limit
        self._locks: dict[str, threading.RLock] = {}
        self._lock_lock = threading.Lock()  # guards _locks, _sessions and _processed

    def lock(self, user_id: str) -> threading.RLock:
        with self._lock_lock:
            if user_id not in self._locks:
                self._locks[user_id] = threading.RLock()
            return self._locks[user_id]

    def get(self, user_id: str) -> ConversationSession | None:
        with self._lock_lock:
            return self._sessions.get(user_id)

    def put(self, user_id: str, session: ConversationSession) -> None:
        with self._lock_lock:
            self._sessions[user_id] = session

    def delete(self, user_id: str) -> None:
        with self._lock_lock:
            self._sessions.pop(user_id, None)

    def has_processed(self, message_id: str) -> bool:
        with self._lock_lock:
            return message_id in self._processed

    def mark_processed(self, message_id: str) -> bool:
        with self._lock_lock:
            if message_id in self._processed:
                self._processed.move_to_end(message_id)
                return False
            self._processed[message_id] = None
            while len(self._processed) > self._processed_limit:
                self._processed.popitem(last=False)
            return True

    def count(self) -> int:
        with self._lock_lock:
            return len(self._sessions)
