"""
Abstract base class for key-value storage backends.

The contract mirrors a browser's synchronous local storage: whole values are
read and written per key, and every ``set`` is a last-writer-wins overwrite.
"""

from abc import ABC, abstractmethod
from typing import Any


class KeyValueStore(ABC):
    """Synchronous JSON key-value store."""

    def __init__(self, **config):
        self.config = config

    @abstractmethod
    def get(self, key: str) -> Any | None:
        """Return the decoded value stored under ``key``, or None if absent."""

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """Serialize ``value`` as JSON and store it under ``key``."""

    @abstractmethod
    def remove(self, key: str) -> bool:
        """Delete ``key``. Returns True if deleted, False if it didn't exist."""

    def contains(self, key: str) -> bool:
        """Check if a key holds a value."""
        return self.get(key) is not None
