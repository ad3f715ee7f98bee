from __future__ import annotations
from ..types import *
from .core import each


def _require_mappings(target: Any, sources: Tuple[Any, ...], operation: str) -> None:
    if not is_mapping(target):
        raise TypeError(f"{operation}() target must be a mapping, got {type(target).__name__}")
    for source in sources:
        if not is_mapping(source):
            raise TypeError(f"{operation}() sources must be mappings, got {type(source).__name__}")


def extend(target: MutableMapping[K, V], *sources: Mapping[K, V]) -> MutableMapping[K, V]:
    """
    copies every key of every source onto target, later sources winning.
    mutates and returns target.
    """
    _require_mappings(target, sources, 'extend')

    def assign(value, key):
        target[key] = value

    each(sources, lambda source: each(source, assign))
    return target


def defaults(target: MutableMapping[K, V], *sources: Mapping[K, V]) -> MutableMapping[K, V]:
    """like extend, but never overwrites a key target already has. mutates and returns target."""
    _require_mappings(target, sources, 'defaults')

    def assign_missing(value, key):
        if key not in target:
            target[key] = value

    each(sources, lambda source: each(source, assign_missing))
    return target
