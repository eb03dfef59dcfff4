from abc import ABC, abstractmethod
from typing import ContextManager, Iterable, Mapping


class SessionRecordStorePort(ABC):
    """Durable string records keyed by name, scoped to one browsing session."""

    @abstractmethod
    def session_lock(self, session_id: str) -> ContextManager:
        """Re-entrant lock held across a read-modify-write of one session."""
        raise NotImplementedError

    @abstractmethod
    def read(self, session_id: str) -> dict[str, str]:
        """Return every record of the session (empty dict when none)."""
        raise NotImplementedError

    @abstractmethod
    def write(self, session_id: str, updates: Mapping[str, str], remove: Iterable[str] = ()) -> None:
        """Apply updates and removals to a session as one atomic operation."""
        raise NotImplementedError
