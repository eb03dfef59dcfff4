from __future__ import annotations

import json
from decimal import Decimal
from typing import Any

from ordercore.domain.entities.attribution import AttributionSnapshot
from ordercore.domain.entities.pricing import LineItem, PriceBreakdown
from ordercore.domain.entities.selection import Child, Contact, Selection

SCHEMA_VERSION = 1


class RecordVersionError(ValueError):
    pass


def _wrap(data: Any) -> str:
    return json.dumps({"version": SCHEMA_VERSION, "data": data}, ensure_ascii=False)


def _unwrap(raw: str) -> Any:
    envelope = json.loads(raw)
    if not isinstance(envelope, dict) or envelope.get("version") != SCHEMA_VERSION:
        raise RecordVersionError(f"Unsupported record version: {envelope.get('version') if isinstance(envelope, dict) else None}")
    return envelope.get("data")


def _money(value: Decimal | None) -> str | None:
    return None if value is None else str(value)


def _decimal(value: Any) -> Decimal | None:
    return None if value is None else Decimal(str(value))


def encode_selection(selection: Selection) -> str:
    return _wrap(
        {
            "recipient_count": selection.recipient_count,
            "add_on_ids": sorted(selection.add_on_ids),
            "photo_count": selection.photo_count,
            "contact": {
                "name": selection.contact.name,
                "email": selection.contact.email,
                "phone": selection.contact.phone,
                "tax_id": selection.contact.tax_id,
            },
            "region": selection.region,
            "children": [{"name": c.name, "photo_url": c.photo_url} for c in selection.children],
            "photo_urls": list(selection.photo_urls),
            "message": selection.message,
            "updated_at": selection.updated_at,
        }
    )


def decode_selection(raw: str) -> Selection:
    data = _unwrap(raw)
    contact = data.get("contact") or {}
    return Selection(
        recipient_count=int(data.get("recipient_count", 1)),
        add_on_ids=frozenset(data.get("add_on_ids") or ()),
        photo_count=int(data.get("photo_count", 0)),
        contact=Contact(
            name=contact.get("name"),
            email=contact.get("email"),
            phone=contact.get("phone"),
            tax_id=contact.get("tax_id"),
        ),
        region=data.get("region") or "pt",
        children=tuple(Child(name=c.get("name", ""), photo_url=c.get("photo_url")) for c in data.get("children") or ()),
        photo_urls=tuple(data.get("photo_urls") or ()),
        message=data.get("message") or "",
        updated_at=data.get("updated_at"),
    )


def encode_pricing(breakdown: PriceBreakdown) -> str:
    return _wrap(
        {
            "items": [
                {
                    "id": item.id,
                    "label": item.label,
                    "unit_price": _money(item.unit_price),
                    "original_price": _money(item.original_price),
                    "quantity": item.quantity,
                }
                for item in breakdown.items
            ],
            "base_price": _money(breakdown.base_price),
            "add_on_total": _money(breakdown.add_on_total),
            "photo_total": _money(breakdown.photo_total),
            "bundle_discount": _money(breakdown.bundle_discount),
            "subtotal": _money(breakdown.subtotal),
            "total": _money(breakdown.total),
            "currency": breakdown.currency,
            "provider": breakdown.provider,
        }
    )


def decode_pricing(raw: str) -> PriceBreakdown:
    data = _unwrap(raw)
    return PriceBreakdown(
        items=tuple(
            LineItem(
                id=item["id"],
                label=item["label"],
                unit_price=_decimal(item["unit_price"]),
                original_price=_decimal(item.get("original_price")),
                quantity=item.get("quantity"),
            )
            for item in data.get("items") or ()
        ),
        base_price=_decimal(data["base_price"]),
        add_on_total=_decimal(data["add_on_total"]),
        photo_total=_decimal(data["photo_total"]),
        bundle_discount=_decimal(data["bundle_discount"]),
        subtotal=_decimal(data["subtotal"]),
        total=_decimal(data["total"]),
        currency=data["currency"],
        provider=data["provider"],
    )


def encode_step(step: int) -> str:
    return _wrap(int(step))


def decode_step(raw: str) -> int:
    return int(_unwrap(raw))


def encode_attribution(snapshot: AttributionSnapshot) -> str:
    return _wrap({"entries": [[k, v] for k, v in snapshot.entries], "captured_at": snapshot.captured_at})


def decode_attribution(raw: str) -> AttributionSnapshot:
    data = _unwrap(raw)
    return AttributionSnapshot(
        entries=tuple((str(k), v) for k, v in data.get("entries") or ()),
        captured_at=data.get("captured_at"),
    )
