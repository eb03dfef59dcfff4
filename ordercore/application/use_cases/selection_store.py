from __future__ import annotations

import json
import logging
import time
from typing import Any, Callable, Iterable, Mapping

from ordercore.application.ports.session_record_store import SessionRecordStorePort
from ordercore.application.use_cases.compute_price import compute_price
from ordercore.application.utils.change_notifier import ChangeNotifier
from ordercore.application.utils.record_codec import (
    RecordVersionError,
    decode_pricing,
    decode_selection,
    decode_step,
    encode_pricing,
    encode_selection,
    encode_step,
)
from ordercore.application.utils.selection_rules import apply_delta, toggle_add_on
from ordercore.domain.entities.pricing import PriceBreakdown
from ordercore.domain.entities.selection import Selection

SELECTION_KEY = "pers_selection"
PRICING_KEY = "pers_pricing"
STEP_KEY = "pers_current_step"
STORE_KEYS: tuple[str, ...] = (SELECTION_KEY, PRICING_KEY, STEP_KEY)

_RECORD_ERRORS = (json.JSONDecodeError, RecordVersionError, KeyError, TypeError, ValueError, OSError)


def price_selection(selection: Selection) -> PriceBreakdown:
    return compute_price(
        selection.recipient_count,
        selection.add_on_ids,
        selection.photo_count,
        selection.region,
    )


class SelectionStore:
    """Wizard selections and their derived price for one session.

    Every ``save`` merges the delta, recomputes the price and persists both in
    a single write before any listener is notified, so readers never see a
    breakdown computed from an older selection.
    """

    def __init__(
        self,
        records: SessionRecordStorePort,
        session_id: str,
        notifier: ChangeNotifier | None = None,
        default_region: str = "pt",
        accepted_photo_schemes: Iterable[str] = ("https://",),
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._records = records
        self._session_id = session_id
        self._notifier = notifier or ChangeNotifier()
        self._default_region = default_region
        self._accepted_photo_schemes = tuple(accepted_photo_schemes)
        self._clock = clock
        self._logger = logging.getLogger(__name__)

    @property
    def session_id(self) -> str:
        return self._session_id

    @property
    def notifier(self) -> ChangeNotifier:
        return self._notifier

    def subscribe(self, listener: Callable[[], None]) -> Callable[[], None]:
        return self._notifier.subscribe(listener)

    def default_selection(self) -> Selection:
        return Selection(region=self._default_region)

    def _read_records(self) -> dict[str, str]:
        try:
            return self._records.read(self._session_id)
        except _RECORD_ERRORS:
            self._logger.exception("Failed to read session records", extra={"session_id": self._session_id})
            return {}

    def _selection_from(self, records: Mapping[str, str]) -> Selection | None:
        raw = records.get(SELECTION_KEY)
        if raw is None:
            return None
        try:
            return decode_selection(raw)
        except _RECORD_ERRORS:
            self._logger.exception("Discarding unreadable selection record", extra={"session_id": self._session_id})
            return None

    def get_selection(self) -> Selection:
        return self._selection_from(self._read_records()) or self.default_selection()

    def get_current_pricing(self) -> PriceBreakdown:
        records = self._read_records()
        selection = self._selection_from(records)
        if selection is None:
            return price_selection(self.default_selection())

        raw = records.get(PRICING_KEY)
        if raw is not None:
            try:
                return decode_pricing(raw)
            except _RECORD_ERRORS:
                self._logger.exception("Discarding unreadable pricing record", extra={"session_id": self._session_id})
        return price_selection(selection)

    def save(self, delta: Mapping[str, Any] | None = None, **fields: Any) -> PriceBreakdown:
        """Merge a partial selection, recompute, persist, then notify."""
        changes = {**(delta or {}), **fields}
        # Read, merge and write run under one session lock.
        with self._records.session_lock(self._session_id):
            current = self.get_selection()
            selection = apply_delta(
                current,
                changes,
                accepted_photo_schemes=self._accepted_photo_schemes,
                updated_at=self._clock(),
            )
            breakdown = price_selection(selection)

            try:
                self._records.write(
                    self._session_id,
                    {
                        SELECTION_KEY: encode_selection(selection),
                        PRICING_KEY: encode_pricing(breakdown),
                    },
                )
            except _RECORD_ERRORS:
                self._logger.exception("Failed to persist selection", extra={"session_id": self._session_id})
                return self.get_current_pricing()

        self._logger.info(
            "Selection saved",
            extra={"session_id": self._session_id, "provider": breakdown.provider, "reason": ",".join(sorted(changes))},
        )
        self._notifier.notify()
        return breakdown

    def toggle(self, add_on_id: str, delta: Mapping[str, Any] | None = None) -> PriceBreakdown:
        """Flip one add-on against the stored selection, then save like ``save``."""
        changes = dict(delta or {})
        with self._records.session_lock(self._session_id):
            base = changes.get("add_on_ids")
            if base is None:
                base = self.get_selection().add_on_ids
            changes["add_on_ids"] = toggle_add_on(base, add_on_id)
            return self.save(changes)

    def get_current_step(self) -> int:
        raw = self._read_records().get(STEP_KEY)
        if raw is None:
            return 1
        try:
            return decode_step(raw)
        except _RECORD_ERRORS:
            self._logger.exception("Discarding unreadable step record", extra={"session_id": self._session_id})
            return 1

    def save_current_step(self, step: int) -> None:
        try:
            self._records.write(self._session_id, {STEP_KEY: encode_step(step)})
        except _RECORD_ERRORS:
            self._logger.exception("Failed to persist current step", extra={"session_id": self._session_id})
            return
        self._notifier.notify()

    def clear(self) -> None:
        """Drop selection, pricing and step in one write. Attribution is kept."""
        try:
            self._records.write(self._session_id, {}, remove=STORE_KEYS)
        except _RECORD_ERRORS:
            self._logger.exception("Failed to clear session", extra={"session_id": self._session_id})
            return
        self._logger.info("Session cleared", extra={"session_id": self._session_id})
        self._notifier.notify()
