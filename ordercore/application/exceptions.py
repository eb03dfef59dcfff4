class InvalidSelectionError(ValueError):
    """Raised when a selection cannot be represented (unknown add-on, bad photo URL, too many children)."""
    pass


class EndpointConfigurationError(RuntimeError):
    """Raised when a provider has no endpoint configured for a legal add-on combination."""

    def __init__(self, provider: str, product_id: str, endpoint_id: str) -> None:
        super().__init__(
            f"No {provider} endpoint configured for product {product_id} ({endpoint_id})"
        )
        self.provider = provider
        self.product_id = product_id
        self.endpoint_id = endpoint_id

