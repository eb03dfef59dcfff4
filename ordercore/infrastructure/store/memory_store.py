from __future__ import annotations

import threading
from typing import Iterable, Mapping

from ordercore.application.ports.session_record_store import SessionRecordStorePort


class MemorySessionRecordStore(SessionRecordStorePort):
    def __init__(self) -> None:
        self._sessions: dict[str, dict[str, str]] = {}
        self._locks: dict[str, threading.RLock] = {}
        self._lock_lock = threading.Lock()

    def session_lock(self, session_id: str) -> threading.RLock:
        with self._lock_lock:
            if session_id not in self._locks:
                self._locks[session_id] = threading.RLock()
            return self._locks[session_id]

    def read(self, session_id: str) -> dict[str, str]:
        with self.session_lock(session_id):
            return dict(self._sessions.get(session_id, {}))

    def write(self, session_id: str, updates: Mapping[str, str], remove: Iterable[str] = ()) -> None:
        with self.session_lock(session_id):
            records = dict(self._sessions.get(session_id, {}))
            for key in remove:
                records.pop(key, None)
            records.update(updates)
            if records:
                self._sessions[session_id] = records
            else:
                self._sessions.pop(session_id, None)
