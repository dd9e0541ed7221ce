"""
Value key derivation.

Strings are hashed as their own UTF-8 bytes (lone surrogates, as produced by
os.fsdecode, are encoded with surrogatepass); everything else is hashed over
a canonical JSON serialization with sorted keys, so structurally equal
values produce the same key regardless of dict insertion order.

The hash is 64-bit FNV-1a folded to 32 bits. It is not collision free:
two different values can share a key, and the store keeps whichever was
added first.

Hashing is a pure-Python loop over the serialized bytes, so every lookup of
a large structured value costs time linear in its serialized size. Prefer a
short custom key for big values.
"""

from __future__ import annotations

import json
from typing import Any

from .errors import UnkeyableValueError

FNV_OFFSET_BASIS = 0xCBF29CE484222325
FNV_PRIME = 0x100000001B3
_MASK_64 = 0xFFFFFFFFFFFFFFFF
_MASK_32 = 0xFFFFFFFF


def canonical_json(value: Any) -> str:
    """Serialize value to compact JSON with sorted keys.

    Raises:
        UnkeyableValueError: If the value is not JSON-serializable
    """
    try:
        return json.dumps(
            value,
            sort_keys=True,
            separators=(",", ":"),
            ensure_ascii=False,
            allow_nan=False,
        )
    except (TypeError, ValueError) as exc:
        raise UnkeyableValueError(value, exc) from exc


def fnv1a_32(data: bytes) -> int:
    """64-bit FNV-1a over data, truncated to the low 32 bits."""
    h = FNV_OFFSET_BASIS
    for byte in data:
        h ^= byte
        h = (h * FNV_PRIME) & _MASK_64
    return h & _MASK_32


def key_material(value: Any) -> str:
    if isinstance(value, str):
        return value
    return canonical_json(value)


def value_key(value: Any) -> str:
    """Return the 8-hex-digit key for a value or custom key string."""
    return f"{fnv1a_32(key_material(value).encode('utf-8', 'surrogatepass')):08x}"
