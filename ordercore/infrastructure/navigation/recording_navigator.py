from __future__ import annotations

import logging

from ordercore.application.ports.navigator import NavigatorPort


class RecordingNavigator(NavigatorPort):
    """Keeps the issued redirect so the HTTP layer can answer with it."""

    def __init__(self) -> None:
        self.last_url: str | None = None
        self._logger = logging.getLogger(__name__)

    def navigate(self, url: str) -> None:
        self.last_url = url
        self._logger.info("Navigation issued", extra={"reason": url.split("?", 1)[0]})
