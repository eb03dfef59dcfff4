from __future__ import annotations

import logging
from typing import Iterable

from ordercore.application.exceptions import EndpointConfigurationError
from ordercore.application.utils.combination_table import COMBINATIONS
from ordercore.domain.entities.add_on import ADD_ON_CATALOG
from ordercore.domain.entities.endpoint import CheckoutProduct, EndpointId

logger = logging.getLogger(__name__)


def resolve_endpoint(add_on_ids: Iterable[str]) -> EndpointId:
    """Map an add-on set to the endpoint that sells exactly that combination.

    The first row of the decision table whose add-ons are all selected wins, so
    the bundle overrides any individual ids that came along with it.
    """
    ids = frozenset(add_on_ids)
    for endpoint_id, required in COMBINATIONS:
        if required <= ids:
            return endpoint_id
    return EndpointId.base


def resolve_endpoint_path(product: CheckoutProduct, provider: str, endpoint_id: EndpointId) -> str:
    """Look up the provisioned path. A gap in the configuration is fatal."""
    path = (product.endpoints.get(provider) or {}).get(endpoint_id)
    if not path:
        logger.error(
            "Checkout endpoint missing",
            extra={"provider": provider, "product_id": product.product_id, "endpoint_id": endpoint_id.value},
        )
        raise EndpointConfigurationError(provider, product.product_id, endpoint_id.value)
    return path


def validate_product_endpoints(product: CheckoutProduct, provider: str) -> list[str]:
    """Return the endpoint ids the provider has no path for (empty when complete)."""
    configured = product.endpoints.get(provider) or {}
    return [endpoint_id.value for endpoint_id, _ in COMBINATIONS if not configured.get(endpoint_id)]


def selected_add_ons(add_on_ids: Iterable[str]) -> tuple[str, ...]:
    ids = set(add_on_ids)
    return tuple(add_on_id for add_on_id in ADD_ON_CATALOG if add_on_id in ids)
