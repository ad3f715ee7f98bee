from .types import Any, Collection
from .chaining import Chain


def chain(collection: Collection) -> Chain[Any]:
    """wrap a sequence or mapping for fluent calls"""
    return Chain(collection)


def from_range(start: int, count: int) -> Chain[int]:
    """chain over count consecutive integers starting at start"""
    return Chain(list(range(start, start + count)))


def empty() -> Chain[Any]:
    """chain over an empty list"""
    return Chain([])


# --- aliases ---
U = chain
