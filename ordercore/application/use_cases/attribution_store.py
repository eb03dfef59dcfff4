from __future__ import annotations

import json
import logging
import time
from typing import Any, Callable, Mapping

from ordercore.application.ports.session_record_store import SessionRecordStorePort
from ordercore.application.utils.record_codec import RecordVersionError, decode_attribution, encode_attribution
from ordercore.domain.entities.attribution import AttributionSnapshot

ATTRIBUTION_KEY = "pers_utm_params"


class AttributionStore:
    """Campaign parameters for a session. Captured once, then only filled where absent."""

    def __init__(
        self,
        records: SessionRecordStorePort,
        session_id: str,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._records = records
        self._session_id = session_id
        self._clock = clock
        self._logger = logging.getLogger(__name__)

    def get(self) -> AttributionSnapshot:
        try:
            raw = self._records.read(self._session_id).get(ATTRIBUTION_KEY)
            return decode_attribution(raw) if raw is not None else AttributionSnapshot()
        except (json.JSONDecodeError, RecordVersionError, KeyError, TypeError, ValueError, OSError):
            self._logger.exception("Discarding unreadable attribution record", extra={"session_id": self._session_id})
            return AttributionSnapshot()

    def capture(self, params: Mapping[str, Any]) -> AttributionSnapshot:
        with self._records.session_lock(self._session_id):
            current = self.get()
            updated = current.fill_missing(params, captured_at=self._clock())
            if updated is current:
                return current
            try:
                self._records.write(self._session_id, {ATTRIBUTION_KEY: encode_attribution(updated)})
            except (TypeError, ValueError, OSError):
                self._logger.exception("Failed to persist attribution", extra={"session_id": self._session_id})
                return current
            return updated
