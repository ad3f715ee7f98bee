from __future__ import annotations
import typing
from ..types import *
from .core import each, filter, index_of, every, contains, _canonical_key
from .utility import flatten

if typing.TYPE_CHECKING:
    from ..chaining import Chain


def intersection(*seqs: Sequence[T]) -> List[T]:
    """
    distinct values present in every input sequence,
    in the order they first appear in the first sequence.
    """
    if not seqs:
        return []
    for seq in seqs:
        require_sequence(seq, 'intersection')

    head, others = seqs[0], seqs[1:]
    seen = set()
    result = []

    def visit(value):
        key = _canonical_key(value)
        if key in seen:
            return
        seen.add(key)
        if every(others, lambda other: contains(other, value)):
            result.append(value)

    each(head, visit)
    return result


def difference(seq: Sequence[T], *others: Sequence[T]) -> List[T]:
    """elements of seq not found in any of the other sequences. duplicates and order are kept."""
    require_sequence(seq, 'difference')
    excluded = flatten(others)
    return filter(seq, lambda value: index_of(excluded, value) == -1)


class SetAccessor(Generic[T]):
    """set algebra on a chain: chain.set.intersection(...), chain.set.difference(...)"""

    def __init__(self, chain_instance: 'Chain[T]'):
        self._chain = chain_instance

    def intersection(self, *others: Sequence[T]) -> 'Chain[T]':
        """values shared by this chain and every other sequence"""
        from ..chaining import Chain
        return Chain(intersection(self._chain._get_data(), *others))

    def difference(self, *others: Sequence[T]) -> 'Chain[T]':
        """values of this chain missing from all other sequences"""
        from ..chaining import Chain
        return Chain(difference(self._chain._get_data(), *others))
