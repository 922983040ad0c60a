"""
On-disk encoding of stored values.

Values are UTF-8 JSON, optionally gzip-wrapped. The encoding also fixes the
file suffix, so a key's format can be recognised from its file name alone.
"""

import gzip
import json
from enum import Enum
from typing import Any


class Encoding(Enum):
    JSON = ".json"
    JSON_GZIP = ".json.gz"

    @property
    def suffix(self) -> str:
        return self.value


def encode_value(value: Any, encoding: Encoding = Encoding.JSON) -> bytes:
    """Serialize ``value``. Raises TypeError/ValueError for non-JSON values."""
    raw = json.dumps(value, ensure_ascii=False, separators=(",", ":")).encode("utf-8")
    if encoding is Encoding.JSON_GZIP:
        return gzip.compress(raw, compresslevel=6)
    return raw


def decode_value(data: bytes, encoding: Encoding = Encoding.JSON) -> Any:
    if encoding is Encoding.JSON_GZIP:
        data = gzip.decompress(data)
    return json.loads(data.decode("utf-8"))
