from __future__ import annotations
import numpy as np
from ..types import *

# sentinel for "no initial value passed to reduce"
_MISSING = object()


def identity(value: T) -> T:
    """returns its argument unchanged"""
    return value


def each(collection: Collection, visit: Visitor) -> None:
    """
    calls visit(value, index, collection) for every element of a sequence, in index order,
    or visit(value, key, collection) for every key of a mapping.
    this is the only place the sequence/mapping distinction is resolved for traversal.
    """
    visit = fit_arity(visit)
    if is_mapping(collection):
        # snapshot keys so the visitor may mutate the mapping
        for key in list(collection.keys()):
            visit(collection[key], key, collection)
    elif is_sequence(collection):
        for index in range(len(collection)):
            visit(collection[index], index, collection)
    else:
        raise TypeError(f"each() expects a sequence or mapping, got {type(collection).__name__}")


def first(seq: Sequence[T], n: Optional[int] = None) -> Union[T, List[T], None]:
    """the leading element, or a list of the first n elements"""
    require_sequence(seq, 'first')
    if n is None:
        return seq[0] if len(seq) > 0 else None
    return list(seq[:max(n, 0)])


def last(seq: Sequence[T], n: Optional[int] = None) -> Union[T, List[T], None]:
    """the trailing element, or a list of the last n elements"""
    require_sequence(seq, 'last')
    if n is None:
        return seq[-1] if len(seq) > 0 else None
    if n <= 0:
        return []
    return list(seq[-n:])


def index_of(seq: Sequence[T], target: Any) -> int:
    """index of the first element equal to target, or -1"""
    require_sequence(seq, 'index_of')
    result = -1

    def visit(item, index):
        nonlocal result
        if result == -1 and item == target:
            result = index

    each(seq, visit)
    return result


def filter(collection: Collection, predicate: Predicate) -> List[Any]:
    """
    elements of a sequence passing the predicate, in order.
    for a mapping the result holds the *keys* whose values pass.
    """
    predicate = fit_arity(predicate)
    keep_keys = is_mapping(collection)
    results = []

    def visit(value, key, coll):
        if predicate(value, key, coll):
            results.append(key if keep_keys else value)

    each(collection, visit)
    return results


def reject(collection: Collection, predicate: Predicate) -> List[Any]:
    """complement of filter: elements (or mapping keys) failing the predicate"""
    predicate = fit_arity(predicate)
    return filter(collection, lambda value, key, coll: not predicate(value, key, coll))


def _canonical_key(value: Any) -> Any:
    try:
        hash(value)
    except TypeError:
        return ('__unhashable__', repr(value))
    return value


def _numeric_unique(data: List[Any]) -> Optional[List[Any]]:
    """np.unique fast path for plain int/float data. returns None when it does not apply."""
    if not data or not all(isinstance(x, (int, float)) and not isinstance(x, bool) for x in data):
        return None
    try:
        _, indices = np.unique(np.array(data), return_index=True)
    except (TypeError, ValueError):
        return None
    # hand back the input objects, not numpy's coerced copies
    return [data[i] for i in indices]


def uniq(seq: Sequence[T]) -> List[T]:
    """
    distinct values of seq. values are compared through a canonical key (the value itself when
    hashable, its repr otherwise), so equal-looking unhashable values collapse into one.
    result order is unspecified.
    """
    require_sequence(seq, 'uniq')
    data = list(seq)
    optimized = _numeric_unique(data)
    if optimized is not None:
        return optimized

    seen = {}

    def visit(value):
        seen.setdefault(_canonical_key(value), value)

    each(seq, visit)
    return list(seen.values())


def map(collection: Collection, transform: Selector) -> List[Any]:
    """transform(value, index, collection) for every element, order and length preserved"""
    transform = fit_arity(transform)
    results = []
    each(collection, lambda value, key, coll: results.append(transform(value, key, coll)))
    return results


def _property(item: Any, name: Any) -> Any:
    if is_mapping(item) or is_sequence(item):
        return item[name]
    return getattr(item, name)


def pluck(seq: Sequence[Any], property_name: Any) -> List[Any]:
    """item[property_name] of every element (attribute lookup for plain objects)"""
    return map(seq, lambda item: _property(item, property_name))


def invoke(collection: Collection, method_or_func: Union[str, Callable[..., Any]],
           args: Optional[Iterable[Any]] = None) -> List[Any]:
    """
    calls func(element, *args) for every element, or the element's own method named
    by a string with *args. raises UnknownMethod when an element lacks that method.
    """
    call_args = tuple(args) if args is not None else ()

    def call(value):
        if callable(method_or_func):
            return method_or_func(value, *call_args)
        method = getattr(value, method_or_func, None)
        if method is None or not callable(method):
            raise UnknownMethod(f"{type(value).__name__} has no method '{method_or_func}'")
        return method(*call_args)

    return map(collection, call)


def reduce(collection: Collection, combine: Combiner, initial: Any = _MISSING) -> Any:
    """
    folds combine(accumulator, value) over the visited values.
    without an initial value the first visited value seeds the fold and combine runs on the rest.
    """
    accumulator = initial
    seeded = initial is not _MISSING

    def visit(value):
        nonlocal accumulator, seeded
        if not seeded:
            accumulator = value
            seeded = True
            return
        accumulator = combine(accumulator, value)

    each(collection, visit)
    if not seeded:
        raise ValueError("cannot reduce an empty collection without an initial value")
    return accumulator


def contains(collection: Collection, target: Any) -> bool:
    """true if any visited value equals target"""
    return reduce(collection, lambda was_found, item: was_found or bool(item == target), False)


def every(collection: Collection, predicate: Optional[Predicate] = None) -> bool:
    """true if the predicate holds for every element. vacuously true when empty."""
    test = fit_arity(predicate or identity)
    results = map(collection, lambda value, key, coll: bool(test(value, key, coll)))
    return reduce(results, lambda previous, current: previous and current, True)


def some(collection: Collection, predicate: Optional[Predicate] = None) -> bool:
    """true if the predicate holds for at least one element. false when empty."""
    test = fit_arity(predicate or identity)
    return not every(collection, lambda value, key, coll: not test(value, key, coll))
