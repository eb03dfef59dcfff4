from __future__ import annotations

from dataclasses import dataclass

LASTLINK = "lastlink"
CARTPANDA = "cartpanda"


@dataclass(frozen=True)
class RegionRoute:
    provider: str  # "lastlink" | "cartpanda"
    currency: str  # "BRL" | "USD"
    base_url: str
    locale: str
