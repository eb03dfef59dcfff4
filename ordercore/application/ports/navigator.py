from abc import ABC, abstractmethod


class NavigatorPort(ABC):
    @abstractmethod
    def navigate(self, url: str) -> None:
        """Send the customer to the checkout URL. Best effort, no confirmation."""
        raise NotImplementedError
