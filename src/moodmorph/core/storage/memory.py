"""In-process storage backend.

Values are held encoded, the way a browser's local storage holds strings, so
callers never share mutable objects with the store.
"""

from typing import Any

from moodmorph.core.exceptions import StorageError

from .base import KeyValueStore
from .codec import decode_value, encode_value


class MemoryStore(KeyValueStore):
    """Dictionary-backed key-value store, used for tests and dry runs."""

    def __init__(self, initial: dict[str, Any] | None = None, **config):
        super().__init__(**config)
        self._data: dict[str, bytes] = {}
        for key, value in (initial or {}).items():
            self.set(key, value)

    def get(self, key: str) -> Any | None:
        raw = self._data.get(key)
        return None if raw is None else decode_value(raw)

    def set(self, key: str, value: Any) -> None:
        try:
            self._data[key] = encode_value(value)
        except (TypeError, ValueError) as e:
            raise StorageError(f"Value for key '{key}' is not JSON-serializable: {e}") from e

    def remove(self, key: str) -> bool:
        return self._data.pop(key, None) is not None

    def __len__(self) -> int:
        return len(self._data)
