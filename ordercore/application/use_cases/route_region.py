from __future__ import annotations

from typing import Mapping

from ordercore.core.config import settings
from ordercore.domain.entities.region import CARTPANDA, LASTLINK, RegionRoute

_LOCALE_PROVIDERS: dict[str, str] = {
    "pt": LASTLINK,
    "pt-br": LASTLINK,
    "en": CARTPANDA,
    "en-us": CARTPANDA,
    "es": CARTPANDA,
    "es-es": CARTPANDA,
}

_CURRENCIES: dict[str, str] = {
    LASTLINK: "BRL",
    CARTPANDA: "USD",
}

# Unmapped locales go to the international provider.
DEFAULT_PROVIDER = CARTPANDA


def provider_for_locale(locale: str | None) -> str:
    key = (locale or "").strip().lower().replace("_", "-")
    return _LOCALE_PROVIDERS.get(key, DEFAULT_PROVIDER)


def default_base_urls() -> dict[str, str]:
    return {
        LASTLINK: settings.LASTLINK_BASE_URL,
        CARTPANDA: settings.CARTPANDA_BASE_URL,
    }


def route_region(locale: str | None, base_urls: Mapping[str, str] | None = None) -> RegionRoute:
    provider = provider_for_locale(locale)
    urls = base_urls if base_urls is not None else default_base_urls()
    return RegionRoute(
        provider=provider,
        currency=_CURRENCIES[provider],
        base_url=urls[provider],
        locale=(locale or "").strip().lower(),
    )
