from __future__ import annotations
import numpy as np
from ..types import *
from ..config import get_config
from .core import each, map


def _is_nested(value: Any) -> bool:
    return isinstance(value, (list, tuple, np.ndarray))


def flatten(nested: Sequence[Any], acc: Optional[List[Any]] = None) -> List[Any]:
    """
    depth-first, left-to-right list of every non-list leaf in a nested list/tuple structure.
    leaves are appended to acc when given, otherwise to a fresh list.
    """
    results = acc if acc is not None else []

    def visit(value):
        if _is_nested(value):
            flatten(value, results)
        else:
            results.append(value)

    each(nested, visit)
    return results


def shuffle(seq: Sequence[T], random_state: Optional[int] = None) -> List[T]:
    """
    a new list with every element of seq exactly once, in uniformly random order.
    seq itself is left untouched. random_state (or the configured seed) makes it repeatable.
    """
    require_sequence(seq, 'shuffle')
    seed = random_state if random_state is not None else get_config().seed
    rng = np.random.default_rng(seed)
    # numpy's permutation is an unbiased fisher-yates over the indices
    order = rng.permutation(len(seq)).tolist()
    return map(order, lambda index: seq[index])


def _sort_key(key: Union[str, Callable[[T], Any], None]) -> Callable[[T], Any]:
    if callable(key):
        return key
    if key == 'length':
        return len
    return lambda item: item


def sort_by(seq: MutableSequence[T], key: Union[str, Callable[[T], Any], None] = None) -> MutableSequence[T]:
    """
    sorts seq IN PLACE, ascending by key(item), by len(item) when key is 'length',
    or by the items themselves. the sort is stable. returns seq.
    """
    sort_key = _sort_key(key)
    if isinstance(seq, list):
        seq.sort(key=sort_key)
    elif isinstance(seq, np.ndarray):
        seq[:] = np.array(sorted(seq, key=sort_key), dtype=seq.dtype)
    elif isinstance(seq, MutableSequence):
        seq[:] = sorted(seq, key=sort_key)
    else:
        raise TypeError(f"sort_by() sorts in place and needs a mutable sequence, got {type(seq).__name__}")
    return seq
