from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from ordercore.domain.entities.add_on import CHILD_PHOTO, FAST_DELIVERY, FOUR_K
from ordercore.domain.entities.region import CARTPANDA, LASTLINK


@dataclass(frozen=True)
class VideoPrice:
    price: Decimal
    original_price: Decimal | None = None


@dataclass(frozen=True)
class PriceTable:
    provider: str
    currency: str
    videos: dict[int, VideoPrice]
    add_ons: dict[str, Decimal]
    bundle_price: Decimal
    bundle_savings: Decimal
    photo_price: Decimal


PRICE_TABLES: dict[str, PriceTable] = {
    LASTLINK: PriceTable(
        provider=LASTLINK,
        currency="BRL",
        videos={
            1: VideoPrice(Decimal("49.99"), Decimal("69.99")),
            2: VideoPrice(Decimal("59.99"), Decimal("79.99")),
            3: VideoPrice(Decimal("69.99"), Decimal("99.99")),
        },
        add_ons={
            FOUR_K: Decimal("12.00"),
            FAST_DELIVERY: Decimal("12.00"),
            CHILD_PHOTO: Decimal("14.90"),
        },
        bundle_price=Decimal("29.99"),
        bundle_savings=Decimal("8.91"),
        photo_price=Decimal("14.90"),
    ),
    CARTPANDA: PriceTable(
        provider=CARTPANDA,
        currency="USD",
        videos={
            1: VideoPrice(Decimal("29.99"), Decimal("49.99")),
            2: VideoPrice(Decimal("39.99"), Decimal("59.99")),
            3: VideoPrice(Decimal("49.99"), Decimal("69.99")),
        },
        add_ons={
            FOUR_K: Decimal("4.99"),
            FAST_DELIVERY: Decimal("2.99"),
            CHILD_PHOTO: Decimal("4.99"),
        },
        bundle_price=Decimal("9.99"),
        bundle_savings=Decimal("2.98"),
        photo_price=Decimal("4.99"),
    ),
}


LINE_LABELS: dict[str, dict[str, str]] = {
    LASTLINK: {
        "base-video-1": "Vídeo 1 criança",
        "base-video-n": "Vídeo {count} crianças",
        FOUR_K: "Qualidade 4K",
        FAST_DELIVERY: "Entrega Rápida",
        CHILD_PHOTO: "Foto da Criança",
        "combo-addons": "Combo Completo (4K + Entrega + Foto)",
        "additional-photos": "Fotos Adicionais",
    },
    CARTPANDA: {
        "base-video-1": "Video for 1 child",
        "base-video-n": "Video for {count} children",
        FOUR_K: "4K Quality",
        FAST_DELIVERY: "Fast Delivery",
        CHILD_PHOTO: "Child Photo",
        "combo-addons": "Complete Bundle (4K + Delivery + Photo)",
        "additional-photos": "Additional Photos",
    },
}
