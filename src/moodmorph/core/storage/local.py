"""
Local filesystem storage backend.

Each key is one file under ``base_path``: ``<key>.json``, or ``<key>.json.gz``
when compression is on. Writes go through a temp file and ``os.replace`` so
readers never see a partially written value.
"""

import errno
import json
import os
import re
import tempfile
from pathlib import Path
from typing import Any

from loguru import logger

from moodmorph.core.exceptions import (
    StorageError,
    StorageKeyError,
    StoragePermissionError,
    StorageQuotaError,
)

from .base import KeyValueStore
from .codec import Encoding, decode_value, encode_value

_SAFE_KEY_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_.\-]*$")
_QUOTA_ERRNOS = {errno.ENOSPC, getattr(errno, "EDQUOT", errno.ENOSPC)}


class LocalStorage(KeyValueStore):
    """Local filesystem key-value store."""

    def __init__(self, base_path: str = "~/.moodmorph-data/store", compress: bool = False, **config):
        super().__init__(**config)
        self.base_path = Path(base_path).expanduser().resolve()
        self.base_path.mkdir(parents=True, exist_ok=True)
        self.encoding = Encoding.JSON_GZIP if compress else Encoding.JSON

    def _validate_key(self, key: str) -> str:
        """Keys are flat file names; separators, traversal and hidden names are rejected."""
        name = key.strip()
        if not name:
            raise StorageKeyError("Storage key cannot be empty.")
        if "\x00" in name:
            raise StorageKeyError("Storage key cannot contain null bytes.")
        if not _SAFE_KEY_RE.match(name) or ".." in name:
            raise StorageKeyError(f"Unsafe storage key '{key}': use letters, digits, '_', '-' and '.'.")
        return name

    def _path(self, name: str, encoding: Encoding) -> Path:
        return self.base_path / f"{name}{encoding.suffix}"

    def get(self, key: str) -> Any | None:
        name = self._validate_key(key)
        for encoding in Encoding:
            path = self._path(name, encoding)
            if path.exists():
                break
        else:
            return None

        try:
            data = path.read_bytes()
        except PermissionError as e:
            raise StoragePermissionError(f"Cannot read {path}: {e}") from e
        try:
            return decode_value(data, encoding)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise StorageError(f"Corrupt value for key '{key}' in {path}: {e}") from e

    def set(self, key: str, value: Any) -> None:
        name = self._validate_key(key)
        target = self._path(name, self.encoding)

        try:
            data = encode_value(value, self.encoding)
        except (TypeError, ValueError) as e:
            raise StorageError(f"Value for key '{key}' is not JSON-serializable: {e}") from e

        fd, tmp_name = tempfile.mkstemp(dir=self.base_path, prefix=f".{target.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data)
            os.replace(tmp_name, target)
        except PermissionError as e:
            self._discard(tmp_name)
            raise StoragePermissionError(f"Cannot write to {target}: {e}") from e
        except OSError as e:
            self._discard(tmp_name)
            if e.errno in _QUOTA_ERRNOS:
                raise StorageQuotaError(f"No space left to store key '{key}': {e}") from e
            raise StorageError(f"Cannot write to {target}: {e}") from e

        # A key written in the other encoding earlier must not shadow this one
        for encoding in Encoding:
            if encoding is not self.encoding:
                self._path(name, encoding).unlink(missing_ok=True)
        logger.debug(f"Stored key '{name}' ({len(data)} bytes)")

    def remove(self, key: str) -> bool:
        name = self._validate_key(key)
        deleted = False
        for encoding in Encoding:
            path = self._path(name, encoding)
            if not path.exists():
                continue
            try:
                path.unlink()
            except PermissionError as e:
                raise StoragePermissionError(f"Cannot delete {path}: {e}") from e
            deleted = True
        return deleted

    @staticmethod
    def _discard(tmp_name: str) -> None:
        Path(tmp_name).unlink(missing_ok=True)
