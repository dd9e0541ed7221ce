"""
Registration table for constructible types.

Registration is metadata only: it records how to build an identifier and
what it depends on, and never creates or touches instances.
"""

from __future__ import annotations

import itertools
from collections.abc import Callable, Hashable, Iterable
from dataclasses import dataclass
from typing import Any, NamedTuple

from lazydi.logging_config import get_logger

from .errors import NotRegisteredError, describe

logger = get_logger(__name__)

DEPENDENCIES_ATTR = "__dependencies__"


class ClassToken(NamedTuple):
    """Opaque handle assigned to an identifier on first registration."""

    handle: int
    name: str

    def __repr__(self) -> str:
        return f"<ClassToken #{self.handle} {self.name}>"


@dataclass(frozen=True)
class Constructible:
    """A registered identifier with its factory and ordered dependencies."""

    identifier: Hashable
    token: ClassToken
    factory: Callable[..., Any]
    dependencies: tuple[Any, ...] = ()


@dataclass(frozen=True)
class RawValue:
    """A value stored in the value store under a hashed key."""

    key: str
    value: Any


def declared_dependencies(identifier: Any) -> tuple[Any, ...]:
    """Read the ``__dependencies__`` declared on a class, if any."""
    deps = getattr(identifier, DEPENDENCIES_ATTR, None)
    if deps is None:
        return ()
    if isinstance(deps, (str, bytes)) or not isinstance(deps, Iterable):
        raise TypeError(
            f"{describe(identifier)}.{DEPENDENCIES_ATTR} must be a sequence, "
            f"got {type(deps).__name__}"
        )
    return tuple(deps)


class Registry:
    """Identifier -> Constructible bookkeeping."""

    def __init__(self) -> None:
        self._tokens: dict[Hashable, ClassToken] = {}
        self._entries: dict[ClassToken, Constructible] = {}
        self._handles = itertools.count(1)

    def register(
        self,
        identifier: Hashable,
        factory: Callable[..., Any] | None = None,
        dependencies: Iterable[Any] | None = None,
    ) -> Constructible:
        """Register or re-register an identifier.

        Args:
            identifier: Class (or other hashable callable) to register
            factory: Callable invoked with resolved dependencies; defaults to identifier
            dependencies: Ordered dependency references; defaults to the
                identifier's ``__dependencies__`` attribute

        Returns:
            The stored entry
        """
        if factory is None:
            if not callable(identifier):
                raise TypeError(f"{describe(identifier)} is not callable and no factory was given")
            factory = identifier
        deps = declared_dependencies(identifier) if dependencies is None else tuple(dependencies)

        token = self._tokens.get(identifier)
        if token is None:
            token = ClassToken(next(self._handles), describe(identifier))
            self._tokens[identifier] = token
        else:
            logger.debug("class_reregistered", identifier=token.name, handle=token.handle)

        entry = Constructible(identifier, token, factory, deps)
        self._entries[token] = entry
        logger.debug(
            "class_registered",
            identifier=token.name,
            handle=token.handle,
            dependencies=[describe(d) for d in deps],
        )
        return entry

    def is_registered(self, identifier: Any) -> bool:
        return self.token_for(identifier) is not None

    def token_for(self, identifier: Any) -> ClassToken | None:
        if isinstance(identifier, ClassToken):
            return identifier if identifier in self._entries else None
        try:
            return self._tokens.get(identifier)
        except TypeError:
            # unhashable identifiers (dicts, lists) can only be value keys
            return None

    def entry(self, identifier: Any) -> Constructible:
        """Return the entry for an identifier.

        Raises:
            NotRegisteredError: If the identifier was never registered
        """
        token = self.token_for(identifier)
        if token is None:
            raise NotRegisteredError(identifier)
        return self._entries[token]

    def identifiers(self) -> list[Hashable]:
        return [entry.identifier for entry in self._entries.values()]

    def entries(self) -> list[Constructible]:
        return list(self._entries.values())

    def __contains__(self, identifier: object) -> bool:
        return self.is_registered(identifier)

    def __len__(self) -> int:
        return len(self._entries)
