from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

TRACKED_KEYS: tuple[str, ...] = (
    "utm_source",
    "utm_medium",
    "utm_campaign",
    "utm_term",
    "utm_content",
    "utm_session_id",
    "fbclid",
    "gclid",
    "click_id",
)


@dataclass(frozen=True)
class AttributionSnapshot:
    """Campaign parameters captured once per session.

    Values are kept as given (they may be non-strings when they come from a
    loosely typed client); consumers decide what to forward.
    """

    entries: tuple[tuple[str, Any], ...] = ()
    captured_at: float | None = None

    def as_dict(self) -> dict[str, Any]:
        return dict(self.entries)

    def get(self, key: str) -> Any:
        return self.as_dict().get(key)

    def fill_missing(self, params: Mapping[str, Any], captured_at: float | None = None) -> AttributionSnapshot:
        """Return a snapshot with keys from ``params`` added only where absent."""
        current = self.as_dict()
        added = False
        for key, value in params.items():
            if value in (None, ""):
                continue
            if key in current and current[key] not in (None, ""):
                continue
            current[key] = value
            added = True
        if not added:
            return self
        return AttributionSnapshot(
            entries=tuple(current.items()),
            captured_at=self.captured_at if self.captured_at is not None else captured_at,
        )
