from __future__ import annotations

import json
import logging
import re
import threading
from pathlib import Path
from typing import Iterable, Mapping

from ordercore.application.ports.session_record_store import SessionRecordStorePort

_SAFE_ID = re.compile(r"[^A-Za-z0-9_.-]")


class JsonSessionRecordStore(SessionRecordStorePort):
    def __init__(self, data_dir: str = "./data/sessions") -> None:
        self._data_dir = Path(data_dir)
        self._data_dir.mkdir(parents=True, exist_ok=True)
        self._locks: dict[str, threading.RLock] = {}
        self._lock_lock = threading.Lock()  # Lock for managing locks dict
        self._logger = logging.getLogger(__name__)

    def session_lock(self, session_id: str) -> threading.RLock:
        """Get or create the re-entrant lock for a session_id."""
        with self._lock_lock:
            if session_id not in self._locks:
                self._locks[session_id] = threading.RLock()
            return self._locks[session_id]

    def _get_file_path(self, session_id: str) -> Path:
        return self._data_dir / f"{_SAFE_ID.sub('_', session_id)}.json"

    def _load(self, session_id: str) -> dict[str, str]:
        """Load session records; a missing file is an empty session."""
        file_path = self._get_file_path(session_id)
        if not file_path.exists():
            return {}
        with open(file_path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"Session file {file_path.name} does not hold an object")
        return {str(k): str(v) for k, v in data.items()}

    def _save(self, session_id: str, records: dict[str, str]) -> None:
        """Replace the session file atomically, or delete it when empty."""
        file_path = self._get_file_path(session_id)
        if not records:
            file_path.unlink(missing_ok=True)
            return

        temp_path = file_path.with_suffix(".json.tmp")
        try:
            with open(temp_path, "w", encoding="utf-8") as f:
                json.dump(records, f, indent=2, ensure_ascii=False)
            temp_path.replace(file_path)
        except Exception:
            temp_path.unlink(missing_ok=True)
            raise

    def read(self, session_id: str) -> dict[str, str]:
        with self.session_lock(session_id):
            return self._load(session_id)

    def write(self, session_id: str, updates: Mapping[str, str], remove: Iterable[str] = ()) -> None:
        with self.session_lock(session_id):
            try:
                records = self._load(session_id)
            except (json.JSONDecodeError, ValueError, OSError):
                self._logger.warning("Discarding unreadable session file", extra={"session_id": session_id})
                records = {}
            for key in remove:
                records.pop(key, None)
            records.update(updates)
            self._save(session_id, records)
