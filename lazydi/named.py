"""
String-keyed container variant.

Classes are keyed by their lower-cased name and declare dependencies by name:

    container = create_named_container()
    container.register_runtime_value("db://localhost:27017", "connectionString")

    class Repository:
        __dependencies__ = ["connectionString"]

        def __init__(self, connection_string):
            self.connection_string = connection_string

    class Service:
        __dependencies__ = ["repository"]

        def __init__(self, repository):
            self.repository = repository

    container.register_class(Service).register_class(Repository)
    service = container.resolve(Service)

Names are case-insensitive. Each container owns a private resolution context,
so every class is still built at most once per container.
"""

from __future__ import annotations

from typing import Any, TypeVar

from lazydi.config import Settings
from lazydi.core.registry import DEPENDENCIES_ATTR
from lazydi.core.resolver import ResolutionContext
from lazydi.logging_config import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


def name_key(ref: Any) -> str:
    """Lower-cased lookup name for a class or a string."""
    if isinstance(ref, str):
        return ref.lower()
    if isinstance(ref, type):
        return ref.__name__.lower()
    raise TypeError(
        f"Invalid name reference, expected str or class, received {type(ref).__name__}"
    )


class NamedContainer:
    """Container resolving classes and runtime values by case-insensitive name."""

    def __init__(self, settings: Settings | None = None):
        self._context = ResolutionContext(settings)
        self._classes: dict[str, type] = {}

    @property
    def registered_classes(self) -> dict[str, type]:
        return dict(self._classes)

    @property
    def instantiated(self) -> dict[str, Any]:
        """Built instances keyed by name."""
        return {name: self._context.instance(name) for name in self._context.list_instantiated()}

    def register_class(self, cls: type) -> NamedContainer:
        """Register a class under its lower-cased name.

        Returns:
            This container, for chaining
        """
        if not hasattr(cls, DEPENDENCIES_ATTR):
            logger.warning(
                "class_without_dependencies",
                identifier=cls.__name__,
                hint=f"declare {DEPENDENCIES_ATTR} = [] if it has none",
            )
        name = name_key(cls)
        deps = [name_key(dep) for dep in getattr(cls, DEPENDENCIES_ATTR, None) or ()]
        self._context.register_factory(name, cls, deps)
        self._classes[name] = cls
        return self

    def register_runtime_value(self, value: Any, key: str) -> NamedContainer:
        """Store a value under a case-insensitive key.

        Registering the same key again replaces the earlier value.

        Returns:
            This container, for chaining
        """
        self._context.set_value(name_key(key), value)
        return self

    def inject_runtime_value(self, key: str, value: T) -> T:
        """Replace a previously registered runtime value.

        Raises:
            NotRegisteredError: If no value was registered under key
        """
        return self._context.inject_value(name_key(key), value)

    def resolve(self, ref: type[T] | str) -> Any:
        """Resolve a class or a runtime value by class or name."""
        return self._context.resolve(name_key(ref))

    def is_registered(self, ref: type | str) -> bool:
        return self._context.is_registered(name_key(ref))


def create_named_container(settings: Settings | None = None) -> NamedContainer:
    """Create a new, empty NamedContainer."""
    return NamedContainer(settings)
