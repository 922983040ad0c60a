"""
Key-value storage backends for moodmorph.

Every persisted piece of state (profile list, current-profile pointer,
per-profile entry collections) is a JSON value under a fixed string key.
Backends are injectable so tests can run against an in-memory store.
"""

from moodmorph.core.exceptions import (
    StorageError,
    StorageKeyError,
    StoragePermissionError,
    StorageQuotaError,
)

from .base import KeyValueStore
from .codec import Encoding, decode_value, encode_value
from .local import LocalStorage
from .memory import MemoryStore

__all__ = [
    "Encoding",
    "KeyValueStore",
    "LocalStorage",
    "MemoryStore",
    "StorageError",
    "StorageKeyError",
    "StoragePermissionError",
    "StorageQuotaError",
    "decode_value",
    "encode_value",
]
