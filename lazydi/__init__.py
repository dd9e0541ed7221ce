"""
lazydi - a minimal dependency-injection registry.

Register classes with their ordered dependencies and raw values such as
connection strings, then resolve fully-constructed, lazily-built singletons:

    from lazydi import ResolutionContext

    context = ResolutionContext()
    context.register("conn", "db://localhost:27017")
    context.register(Repository, dependencies=["conn"])
    repo = context.resolve(Repository)
"""

from lazydi.config import Settings
from lazydi.container import create_context, get_context, reset_context
from lazydi.core import (
    ClassToken,
    CyclicDependencyError,
    DependencyError,
    InstanceCache,
    NotInstantiatedError,
    NotRegisteredError,
    Registry,
    ResolutionContext,
    UnkeyableValueError,
    ValueStore,
)
from lazydi.injectable import injectable, value
from lazydi.named import NamedContainer, create_named_container

__version__ = "0.1.0"

__all__ = [
    "ClassToken",
    "CyclicDependencyError",
    "DependencyError",
    "InstanceCache",
    "NamedContainer",
    "NotInstantiatedError",
    "NotRegisteredError",
    "Registry",
    "ResolutionContext",
    "Settings",
    "UnkeyableValueError",
    "ValueStore",
    "create_context",
    "create_named_container",
    "get_context",
    "injectable",
    "reset_context",
    "value",
]
