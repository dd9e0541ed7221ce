"""
Singleton instance cache.

Maps a class token to the one instance built for it. Entries are never
evicted; callers are expected to put each token at most once.
"""

from __future__ import annotations

from collections.abc import Hashable, Iterator, Mapping
from types import MappingProxyType
from typing import Any

from .errors import NotInstantiatedError


class InstanceCache:
    """Token -> instance mapping with insertion-ordered introspection."""

    def __init__(self) -> None:
        self._instances: dict[Hashable, Any] = {}

    def put(self, token: Hashable, instance: Any) -> None:
        self._instances[token] = instance

    def has(self, token: Hashable) -> bool:
        return token in self._instances

    def get(self, token: Hashable) -> Any:
        """Return the cached instance for a token.

        Raises:
            NotInstantiatedError: If nothing was cached under the token
        """
        try:
            return self._instances[token]
        except KeyError:
            raise NotInstantiatedError(token) from None

    def all(self) -> Mapping[Hashable, Any]:
        """Read-only snapshot of every cached instance."""
        return MappingProxyType(dict(self._instances))

    def tokens(self) -> list[Hashable]:
        return list(self._instances)

    def __contains__(self, token: object) -> bool:
        return token in self._instances

    def __len__(self) -> int:
        return len(self._instances)

    def __iter__(self) -> Iterator[Hashable]:
        return iter(list(self._instances))
