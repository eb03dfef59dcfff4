from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

import httpx

from ordercore.application.ports.endpoint_catalog import EndpointCatalogPort
from ordercore.application.exceptions import EndpointConfigurationError
from ordercore.application.use_cases.resolve_endpoint import (
    resolve_endpoint,
    resolve_endpoint_path,
    selected_add_ons,
)
from ordercore.application.utils.combination_table import COMBINATIONS, FLAG_PARAMS
from ordercore.application.utils.contact_format import clean_text, digits_only
from ordercore.domain.entities.endpoint import EndpointMapping
from ordercore.domain.entities.region import RegionRoute
from ordercore.domain.entities.selection import Contact, Selection

logger = logging.getLogger(__name__)


def add_on_flags(add_on_ids: Iterable[str]) -> dict[str, bool]:
    """Per add-on boolean flags, read off the decision table row the ids land on."""
    ids = frozenset(add_on_ids)
    row: frozenset[str] = frozenset()
    for _, required in COMBINATIONS:
        if required <= ids:
            row = required
            break
    return {add_on_id: add_on_id in row for add_on_id in FLAG_PARAMS}


def customer_params(customer: Contact | None) -> dict[str, str]:
    """Customer fields for provider autofill. Absent or empty fields are left out."""
    if customer is None:
        return {}
    params: dict[str, str] = {}
    name = clean_text(customer.name)
    email = clean_text(customer.email)
    phone = digits_only(customer.phone)
    tax_id = digits_only(customer.tax_id)
    if name:
        params["customer_name"] = name
    if email:
        params["customer_email"] = email
    if phone:
        params["customer_phone"] = phone
    if tax_id:
        params["customer_tax_id"] = tax_id
    return params


def attribution_params(attribution: Mapping[str, Any] | None) -> dict[str, str]:
    params: dict[str, str] = {}
    for key, value in (attribution or {}).items():
        if not key or not value or not isinstance(value, str):
            continue
        params[key] = value
    return params


def build_checkout_url(
    endpoint_path: str,
    attribution: Mapping[str, Any] | None,
    customer: Contact | None,
    provider_base_url: str,
    add_on_ids: Iterable[str] = (),
) -> str:
    base = provider_base_url.rstrip("/")
    path = endpoint_path.lstrip("/")

    params: dict[str, str] = dict(customer_params(customer))
    for add_on_id, selected in add_on_flags(add_on_ids).items():
        params[FLAG_PARAMS[add_on_id]] = "true" if selected else "false"

    for key, value in attribution_params(attribution).items():
        if key in params:
            logger.debug("Attribution key shadows checkout param; skipped", extra={"reason": key})
            continue
        params[key] = value

    return str(httpx.URL(f"{base}/{path}", params=params))


def map_checkout(
    selection: Selection,
    route: RegionRoute,
    catalog: EndpointCatalogPort,
    attribution: Mapping[str, Any] | None = None,
) -> tuple[EndpointMapping, str]:
    """Resolve the endpoint for a selection and assemble its redirect URL."""
    product = catalog.get_product_for_recipients(selection.recipient_count)
    endpoint_id = resolve_endpoint(selection.add_on_ids)
    if product is None:
        raise EndpointConfigurationError(route.provider, f"recipients={selection.recipient_count}", endpoint_id.value)

    path = resolve_endpoint_path(product, route.provider, endpoint_id)
    mapping = EndpointMapping(
        product_id=product.product_id,
        selected_add_on_ids=selected_add_ons(selection.add_on_ids),
        resolved_endpoint_id=endpoint_id,
        endpoint_path=path,
        attribution_params=attribution_params(attribution),
        customer_params=customer_params(selection.contact),
    )
    url = build_checkout_url(path, attribution, selection.contact, route.base_url, selection.add_on_ids)
    logger.info(
        "Checkout URL built",
        extra={"provider": route.provider, "endpoint_id": endpoint_id.value, "product_id": product.product_id},
    )
    return mapping, url
