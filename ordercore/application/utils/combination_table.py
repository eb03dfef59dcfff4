from __future__ import annotations

from ordercore.domain.entities.add_on import BUNDLE, CHILD_PHOTO, FAST_DELIVERY, FOUR_K
from ordercore.domain.entities.endpoint import EndpointId

# Single decision table shared by the endpoint resolver and the checkout URL
# flags. Rows are in resolution priority: bundle, triple, pairs, singletons, base.
COMBINATIONS: tuple[tuple[EndpointId, frozenset[str]], ...] = (
    (EndpointId.with_combo, frozenset({BUNDLE})),
    (EndpointId.with_all, frozenset({FOUR_K, FAST_DELIVERY, CHILD_PHOTO})),
    (EndpointId.with_4k_and_fast_delivery, frozenset({FOUR_K, FAST_DELIVERY})),
    (EndpointId.with_4k_and_photo, frozenset({FOUR_K, CHILD_PHOTO})),
    (EndpointId.with_fast_delivery_and_photo, frozenset({FAST_DELIVERY, CHILD_PHOTO})),
    (EndpointId.with_4k, frozenset({FOUR_K})),
    (EndpointId.with_fast_delivery, frozenset({FAST_DELIVERY})),
    (EndpointId.with_photo, frozenset({CHILD_PHOTO})),
    (EndpointId.base, frozenset()),
)

# Query parameter carrying each add-on's flag on the checkout URL.
FLAG_PARAMS: dict[str, str] = {
    FOUR_K: "bump_4k_quality",
    FAST_DELIVERY: "bump_fast_delivery",
    CHILD_PHOTO: "bump_child_photo",
    BUNDLE: "bump_combo",
}
