from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from ordercore.application.use_cases.route_region import provider_for_locale
from ordercore.domain.entities.add_on import BUNDLE, INDIVIDUAL_ADD_ONS, MAX_RECIPIENTS
from ordercore.domain.entities.pricing import LineItem, PriceBreakdown
from ordercore.domain.price_tables import LINE_LABELS, PRICE_TABLES, PriceTable

CENT = Decimal("0.01")

BASE_ITEM_ID = "base-video"
PHOTOS_ITEM_ID = "additional-photos"


def _money(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def clamp_recipients(recipient_count: int) -> int:
    return min(max(int(recipient_count), 1), MAX_RECIPIENTS)


def price_table_for(region: str | None) -> PriceTable:
    return PRICE_TABLES[provider_for_locale(region)]


def compute_price(
    recipient_count: int,
    add_on_ids: Iterable[str],
    photo_count: int,
    region: str | None,
) -> PriceBreakdown:
    """Price one selection.

    ``recipient_count`` is clamped to 1..3 and ``photo_count`` to >= 0. When the
    bundle is present the individual add-ons are ignored; mutual exclusivity is
    enforced upstream when the Selection is built.

    Line items come out in a fixed order: base video, then the bundle or the
    individual add-ons in catalog order, then the photo item when photos > 0.
    """
    table = price_table_for(region)
    labels = LINE_LABELS[table.provider]
    count = clamp_recipients(recipient_count)
    photos = max(int(photo_count), 0)
    ids = set(add_on_ids)

    video = table.videos[count]
    base_label = labels["base-video-1"] if count == 1 else labels["base-video-n"].format(count=count)
    items: list[LineItem] = [
        LineItem(
            id=BASE_ITEM_ID,
            label=base_label,
            unit_price=video.price,
            original_price=video.original_price,
        )
    ]

    if BUNDLE in ids:
        add_on_total = table.bundle_price
        bundle_discount = table.bundle_savings
        items.append(
            LineItem(
                id=BUNDLE,
                label=labels[BUNDLE],
                unit_price=table.bundle_price,
                original_price=_money(sum(table.add_ons.values(), Decimal("0"))),
            )
        )
    else:
        add_on_total = Decimal("0")
        bundle_discount = Decimal("0")
        for add_on_id in INDIVIDUAL_ADD_ONS:
            if add_on_id not in ids:
                continue
            price = table.add_ons[add_on_id]
            add_on_total += price
            items.append(LineItem(id=add_on_id, label=labels[add_on_id], unit_price=price))

    photo_total = table.photo_price * photos
    if photos > 0:
        items.append(
            LineItem(
                id=PHOTOS_ITEM_ID,
                label=labels[PHOTOS_ITEM_ID],
                unit_price=table.photo_price,
                quantity=photos,
            )
        )

    subtotal = _money(sum((item.amount for item in items), Decimal("0")))
    total = max(subtotal - bundle_discount, Decimal("0"))

    return PriceBreakdown(
        items=tuple(items),
        base_price=video.price,
        add_on_total=_money(add_on_total),
        photo_total=_money(photo_total),
        bundle_discount=_money(bundle_discount),
        subtotal=subtotal,
        total=_money(total),
        currency=table.currency,
        provider=table.provider,
    )


def format_price(amount: Decimal, currency: str) -> str:
    value = _money(amount)
    if currency == "BRL":
        return f"R$ {value:.2f}".replace(".", ",")
    return f"${value:.2f}"


def pricing_summary(breakdown: PriceBreakdown) -> dict[str, object]:
    """Display strings for the order summary fragment."""
    currency = breakdown.currency
    return {
        "base_price": format_price(breakdown.base_price, currency),
        "add_ons": format_price(breakdown.add_on_total, currency),
        "photos": format_price(breakdown.photo_total, currency),
        "discount": format_price(breakdown.bundle_discount, currency) if breakdown.bundle_discount > 0 else None,
        "total": format_price(breakdown.total, currency),
        "currency": currency,
        "items": [
            {
                "id": item.id,
                "label": item.label,
                "amount": format_price(item.amount, currency),
                "original": format_price(item.original_price, currency) if item.original_price else None,
                "quantity": item.quantity,
            }
            for item in breakdown.items
        ],
    }
