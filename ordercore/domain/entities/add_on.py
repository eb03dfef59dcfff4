from __future__ import annotations

FOUR_K = "4k-quality"
FAST_DELIVERY = "fast-delivery"
CHILD_PHOTO = "child-photo"
BUNDLE = "combo-addons"

# Catalog order; renderers rely on it for line item ordering.
INDIVIDUAL_ADD_ONS: tuple[str, ...] = (FOUR_K, FAST_DELIVERY, CHILD_PHOTO)
ADD_ON_CATALOG: tuple[str, ...] = INDIVIDUAL_ADD_ONS + (BUNDLE,)

MAX_RECIPIENTS = 3
