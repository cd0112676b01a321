"""Abstract record store interface."""

from abc import ABC, abstractmethod
from typing import Any, Optional


class RecordStore(ABC):
    """Abstract key-value store for one client's planning records.

    Values are JSON-compatible: lists of record objects, single record
    objects, or plain numbers. The calculation engine never talks to a store;
    services read snapshots from it and pass plain values along.
    """

    owner: str

    @abstractmethod
    def connect(self) -> None:
        """Connect to the store."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the store."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize store schema (create tables)."""
        pass

    @abstractmethod
    def get(self, key: str) -> Optional[Any]:
        """Get the value stored under key, or None if the key is absent."""
        pass

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """Store value under key, replacing any previous value."""
        pass

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Remove key. Returns True if a value was removed."""
        pass

    @abstractmethod
    def list_keys(self) -> list[str]:
        """List keys that currently hold a value, sorted."""
        pass
