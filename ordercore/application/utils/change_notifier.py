from __future__ import annotations

import logging
from typing import Callable

Listener = Callable[[], None]


class ChangeNotifier:
    """Payload-less broadcast. Listeners re-read the store when called."""

    def __init__(self) -> None:
        self._listeners: list[Listener] = []
        self._logger = logging.getLogger(__name__)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def notify(self) -> None:
        # Snapshot so a listener may unsubscribe while being notified.
        for listener in list(self._listeners):
            try:
                listener()
            except Exception:
                self._logger.exception("Change listener failed", extra={"reason": getattr(listener, "__name__", "listener")})

    @property
    def listener_count(self) -> int:
        return len(self._listeners)
