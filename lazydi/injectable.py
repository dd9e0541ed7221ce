"""
Declarative registration helpers.

    conn = value("db://localhost:27017", key="conn")

    @injectable("conn")
    class Repository:
        def __init__(self, conn: str):
            self.conn = conn

    repo = get_context().resolve(Repository)
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

from lazydi.container import get_context
from lazydi.core.resolver import ResolutionContext

T = TypeVar("T")


def injectable(
    *dependencies: Any,
    context: ResolutionContext | None = None,
) -> Callable[[type[T]], type[T]]:
    """Declare a class's dependencies and register it.

    Args:
        dependencies: Ordered dependency references, matching constructor order
        context: Context to register on (defaults to the default context)
    """

    def decorator(cls: type[T]) -> type[T]:
        target = context if context is not None else get_context()
        return target.injectable(*dependencies)(cls)

    return decorator


def value(obj: T, key: str | None = None, context: ResolutionContext | None = None) -> T:
    """Register a raw value and return it."""
    target = context if context is not None else get_context()
    return target.register_value(obj, key=key)
