"""
Core primitives: instance cache, value store, registry and resolver.
"""

from .errors import (
    CyclicDependencyError,
    DependencyError,
    NotInstantiatedError,
    NotRegisteredError,
    UnkeyableValueError,
)
from .hashing import canonical_json, fnv1a_32, value_key
from .instance_cache import InstanceCache
from .registry import ClassToken, Constructible, RawValue, Registry
from .resolver import ResolutionContext
from .values import ValueStore

__all__ = [
    "ClassToken",
    "Constructible",
    "CyclicDependencyError",
    "DependencyError",
    "InstanceCache",
    "NotInstantiatedError",
    "NotRegisteredError",
    "RawValue",
    "Registry",
    "ResolutionContext",
    "UnkeyableValueError",
    "ValueStore",
    "canonical_json",
    "fnv1a_32",
    "value_key",
]
