from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class LineItem:
    id: str
    label: str
    unit_price: Decimal
    original_price: Decimal | None = None
    quantity: int | None = None

    @property
    def amount(self) -> Decimal:
        return self.unit_price * (self.quantity or 1)


@dataclass(frozen=True)
class PriceBreakdown:
    items: tuple[LineItem, ...]
    base_price: Decimal
    add_on_total: Decimal
    photo_total: Decimal
    bundle_discount: Decimal
    subtotal: Decimal
    total: Decimal
    currency: str
    provider: str
