"""Abstract storage interface."""

from abc import ABC, abstractmethod
from typing import Optional


class Database(ABC):
    """Key-value storage for serialized application state."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    @abstractmethod
    def get_value(self, key: str) -> Optional[str]:
        """Get the value stored under key, or None if absent."""
        pass

    @abstractmethod
    def set_value(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""
        pass

    @abstractmethod
    def delete_value(self, key: str) -> None:
        """Remove key. Removing an absent key is a no-op."""
        pass
