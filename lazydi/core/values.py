"""
Raw value store.

Holds non-class dependencies such as connection strings or parsed config,
keyed by the hash of their content or of a custom key. Insertion is
first-write-wins: adding a second value under an existing key keeps the
first one and returns it.
"""

from __future__ import annotations

from typing import Any

from lazydi.logging_config import get_logger

from .errors import NotRegisteredError, UnkeyableValueError
from .hashing import value_key

logger = get_logger(__name__)


class ValueStore:
    """Mapping of value keys to raw values."""

    def __init__(self) -> None:
        self._values: dict[str, Any] = {}

    def add(self, value: Any, key: str | None = None) -> Any:
        """Store a value unless its key is already taken.

        Args:
            value: Raw value to store
            key: Optional custom key; when omitted the value itself is hashed

        Returns:
            The stored value, which is the earlier one if the key existed

        Raises:
            UnkeyableValueError: If no key is given and value is not JSON-serializable
        """
        hashed = value_key(key if key is not None else value)
        if hashed in self._values:
            logger.debug("value_kept", key=hashed, custom_key=key)
            return self._values[hashed]
        self._values[hashed] = value
        logger.debug("value_registered", key=hashed, custom_key=key)
        return value

    def has(self, key_material: Any) -> str | None:
        """Return the hashed key if key_material is stored, else None."""
        try:
            hashed = value_key(key_material)
        except UnkeyableValueError:
            return None
        if hashed in self._values:
            return hashed
        return None

    def get(self, hashed_key: str) -> Any:
        """Return the value stored under an already-hashed key.

        Raises:
            NotRegisteredError: If nothing is stored under the key
        """
        try:
            return self._values[hashed_key]
        except KeyError:
            raise NotRegisteredError(
                hashed_key, f"No value stored under key {hashed_key}"
            ) from None

    def lookup(self, key_material: Any) -> Any:
        """Hash key_material and return the stored value."""
        hashed = self.has(key_material)
        if hashed is None:
            raise NotRegisteredError(key_material)
        return self._values[hashed]

    def replace(self, key_material: Any, value: Any) -> Any:
        """Overwrite the value stored under an existing key.

        Raises:
            NotRegisteredError: If the key was never added
        """
        hashed = self.has(key_material)
        if hashed is None:
            raise NotRegisteredError(
                key_material,
                f"Value {key_material!r} is not registered. "
                f"Add it first with context.register_value(..., key={key_material!r})",
            )
        self._values[hashed] = value
        logger.debug("value_replaced", key=hashed)
        return value

    def keys(self) -> list[str]:
        return list(self._values)

    def __contains__(self, key_material: object) -> bool:
        return self.has(key_material) is not None

    def __len__(self) -> int:
        return len(self._values)
