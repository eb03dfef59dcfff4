from __future__ import annotations

from ordercore.application.ports.endpoint_catalog import EndpointCatalogPort
from ordercore.domain.entities.add_on import MAX_RECIPIENTS
from ordercore.domain.entities.endpoint import CheckoutProduct
from ordercore.infrastructure.catalog.endpoint_catalog_data import CHECKOUT_PRODUCTS


class EndpointCatalogStore(EndpointCatalogPort):
    def __init__(self, products: dict[str, CheckoutProduct] | None = None) -> None:
        self._products = products if products is not None else CHECKOUT_PRODUCTS

    def get_product(self, product_id: str) -> CheckoutProduct | None:
        return self._products.get(product_id.strip())

    def get_product_for_recipients(self, recipient_count: int) -> CheckoutProduct | None:
        count = min(max(recipient_count, 1), MAX_RECIPIENTS)
        for product in self._products.values():
            if product.recipient_count == count:
                return product
        return None
