from __future__ import annotations

from datetime import datetime, timezone

from ordercore.application.utils.contact_format import digits_only
from ordercore.application.use_cases.resolve_endpoint import selected_add_ons
from ordercore.domain.entities.add_on import FAST_DELIVERY
from ordercore.domain.entities.attribution import TRACKED_KEYS, AttributionSnapshot
from ordercore.domain.entities.order_submission import OrderSubmission
from ordercore.domain.entities.selection import Selection


def build_order_submission(
    selection: Selection,
    attribution: AttributionSnapshot,
    session_id: str,
    now: datetime | None = None,
) -> OrderSubmission:
    """Flatten a selection into the record handed to the order automation."""
    now = now or datetime.now(timezone.utc)
    add_ons = selected_add_ons(selection.add_on_ids)
    # The bundle includes fast delivery.
    priority = 1 if (FAST_DELIVERY in add_ons or selection.has_bundle) else None

    tracked = attribution.as_dict()
    attribution_block = {key: tracked.get(key) for key in TRACKED_KEYS if key != "utm_session_id"}
    attribution_block["utm_session_id"] = tracked.get("utm_session_id")

    return OrderSubmission(
        session_id=session_id,
        contact={
            "name": selection.contact.name,
            "email": selection.contact.email,
            "phone": digits_only(selection.contact.phone) or None,
            "tax_id": digits_only(selection.contact.tax_id) or None,
        },
        children=[{"name": child.name, "photo_url": child.photo_url} for child in selection.children],
        message=selection.message,
        add_on_ids=list(add_ons),
        attribution=attribution_block,
        metadata={
            "timestamp": now.isoformat(),
            "locale": selection.region,
            "recipient_count": selection.recipient_count,
            "include_photos": selection.photo_count > 0,
            "photo_urls": list(selection.photo_urls),
            "priority": priority,
        },
    )
