from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class EndpointId(str, Enum):
    base = "base"
    with_4k = "with4K"
    with_fast_delivery = "withFastDelivery"
    with_photo = "withPhoto"
    with_4k_and_fast_delivery = "with4KAndFastDelivery"
    with_4k_and_photo = "with4KAndPhoto"
    with_fast_delivery_and_photo = "withFastDeliveryAndPhoto"
    with_all = "withAll"
    with_combo = "withCombo"


@dataclass(frozen=True)
class CheckoutProduct:
    product_id: str
    recipient_count: int
    endpoints: dict[str, dict[EndpointId, str]] = field(default_factory=dict)  # provider -> endpoint id -> path


@dataclass(frozen=True)
class EndpointMapping:
    product_id: str
    selected_add_on_ids: tuple[str, ...]
    resolved_endpoint_id: EndpointId
    endpoint_path: str
    attribution_params: dict[str, str] = field(default_factory=dict)
    customer_params: dict[str, str] = field(default_factory=dict)
