from __future__ import annotations

from abc import ABC, abstractmethod

from ordercore.domain.entities.endpoint import CheckoutProduct


class EndpointCatalogPort(ABC):
    @abstractmethod
    def get_product_for_recipients(self, recipient_count: int) -> CheckoutProduct | None:
        """Get the checkout product sold for a recipient count (clamped to the catalog range)."""
        raise NotImplementedError

    @abstractmethod
    def get_product(self, product_id: str) -> CheckoutProduct | None:
        raise NotImplementedError
