"""
Resolution context: the recursive resolver tying the registry, value store
and instance cache together.

Usage:
    context = ResolutionContext()
    conn = context.register_value("db://localhost:27017", key="conn")
    context.register(Repository, dependencies=["conn"])
    context.register(Service, dependencies=[Repository])
    service = context.resolve(Service)

Resolution is depth-first and eager. Each dependency is resolved in declared
order before its dependent is constructed, and every class is built at most
once per context. Raw values are returned as stored and never cached as
instances.
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Hashable, Iterable
from typing import Any, TypeVar

from lazydi.config import Settings
from lazydi.logging_config import get_logger

from .errors import (
    CyclicDependencyError,
    DependencyError,
    NotInstantiatedError,
    NotRegisteredError,
    describe,
)
from .instance_cache import InstanceCache
from .registry import Constructible, RawValue, Registry
from .values import ValueStore

logger = get_logger(__name__)

T = TypeVar("T")


class ResolutionContext:
    """Owns one registry, value store and instance cache.

    All public operations hold a single reentrant lock for their full
    duration, so concurrent resolves of the same class still build it once.
    """

    def __init__(self, settings: Settings | None = None):
        """Initialize an empty context.

        Args:
            settings: Runtime settings (defaults to Settings())
        """
        self.settings = settings or Settings()
        self.registry = Registry()
        self.values = ValueStore()
        self.instances = InstanceCache()
        self._lock = threading.RLock()
        self._resolving: list[Constructible] = []

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(
        self,
        identifier: Any,
        factory_or_value: Any = None,
        dependencies: Iterable[Any] | None = None,
    ) -> ResolutionContext:
        """Register a constructible class, or a raw value under a string key.

        A string identifier registers ``factory_or_value`` as a raw value
        with that custom key. Any other identifier registers a constructible
        whose factory defaults to the identifier itself.

        Args:
            identifier: Class to register, or custom value key
            factory_or_value: Factory for a class, value for a string key
            dependencies: Ordered dependency references for a class

        Returns:
            This context, for chaining
        """
        with self._lock:
            if isinstance(identifier, str):
                if dependencies is not None:
                    raise TypeError("Raw values cannot declare dependencies")
                self.values.add(factory_or_value, key=identifier)
            else:
                self.registry.register(identifier, factory_or_value, dependencies)
        return self

    def register_factory(
        self,
        identifier: Hashable,
        factory: Callable[..., Any],
        dependencies: Iterable[Any] | None = None,
    ) -> ResolutionContext:
        """Register a constructible under any hashable identifier, strings included."""
        with self._lock:
            self.registry.register(identifier, factory, dependencies)
        return self

    def register_value(self, value: T, key: str | None = None) -> T:
        """Store a raw value and return it.

        Allows registration at the assignment site:
            conn = context.register_value("db://localhost:27017")

        Returns:
            The stored value; the first one registered if the key was taken
        """
        with self._lock:
            return self.values.add(value, key=key)

    def inject_value(self, key: Any, value: T) -> T:
        """Replace the value stored under an existing key.

        Instances already built with the old value keep it.

        Raises:
            NotRegisteredError: If the key was never registered
        """
        with self._lock:
            return self.values.replace(key, value)

    def set_value(self, key: str, value: T) -> T:
        """Store a value under a custom key, replacing any earlier one."""
        with self._lock:
            if self.values.has(key) is not None:
                return self.values.replace(key, value)
            return self.values.add(value, key=key)

    def injectable(self, *dependencies: Any) -> Callable[[type[T]], type[T]]:
        """Class decorator declaring dependencies and registering the class.

        Usage:
            @context.injectable(Repository, "conn")
            class Service:
                def __init__(self, repo, conn): ...
        """

        def decorator(cls: type[T]) -> type[T]:
            cls.__dependencies__ = tuple(dependencies)
            self.register(cls)
            return cls

        return decorator

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def lookup(self, identifier: Any) -> Constructible | RawValue:
        """Return the registered entry behind an identifier.

        Raises:
            NotRegisteredError: If neither the registry nor the value store knows it
        """
        with self._lock:
            return self._lookup(identifier)

    def _lookup(self, identifier: Any) -> Constructible | RawValue:
        token = self.registry.token_for(identifier)
        if token is not None:
            return self.registry.entry(token)
        hashed = self.values.has(identifier)
        if hashed is not None:
            return RawValue(hashed, self.values.get(hashed))
        raise NotRegisteredError(identifier)

    def is_registered(self, identifier: Any) -> bool:
        with self._lock:
            return self.registry.is_registered(identifier) or self.values.has(identifier) is not None

    def is_instantiated(self, identifier: Any) -> bool:
        with self._lock:
            token = self.registry.token_for(identifier)
            return token is not None and self.instances.has(token)

    def instance(self, identifier: Any) -> Any:
        """Return an already-built instance without building it.

        Raises:
            NotRegisteredError: If the identifier is unknown
            NotInstantiatedError: If it is registered but was never resolved
        """
        with self._lock:
            entry = self._lookup(identifier)
            if isinstance(entry, RawValue):
                return entry.value
            if not self.instances.has(entry.token):
                raise NotInstantiatedError(entry.identifier)
            return self.instances.get(entry.token)

    def list_registered(self) -> list[Any]:
        """Registered class identifiers followed by stored value keys."""
        with self._lock:
            return [*self.registry.identifiers(), *self.values.keys()]

    def list_instantiated(self) -> list[Hashable]:
        """Identifiers with a cached instance, in construction order."""
        with self._lock:
            return [self.registry.entry(token).identifier for token in self.instances.tokens()]

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def resolve(self, identifier: Any) -> Any:
        """Return the instance or value for an identifier, building it if needed.

        Args:
            identifier: Registered class, or key material of a stored value

        Returns:
            The singleton instance, or the stored raw value

        Raises:
            NotRegisteredError: If the identifier or any transitive dependency is unknown
            CyclicDependencyError: If cycle detection is on and a cycle is found
        """
        with self._lock:
            try:
                return self._resolve(identifier)
            except DependencyError as exc:
                logger.debug("resolve_failed", identifier=describe(identifier), error=str(exc))
                raise

    def _resolve(self, identifier: Any) -> Any:
        entry = self._lookup(identifier)
        if isinstance(entry, RawValue):
            return entry.value

        token = entry.token
        if self.instances.has(token):
            return self.instances.get(token)

        if self.settings.detect_cycles:
            pending = [p.token for p in self._resolving]
            if token in pending:
                chain = [p.identifier for p in self._resolving[pending.index(token):]]
                raise CyclicDependencyError([*chain, entry.identifier])
            self._resolving.append(entry)

        try:
            args = [self._resolve(dependency) for dependency in entry.dependencies]
            instance = entry.factory(*args)
        finally:
            if self.settings.detect_cycles:
                self._resolving.pop()

        self.instances.put(token, instance)
        logger.debug(
            "instance_created",
            identifier=token.name,
            handle=token.handle,
            dependencies=len(args),
        )
        return instance
