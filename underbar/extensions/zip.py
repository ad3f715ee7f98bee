from __future__ import annotations
from ..types import *
from .core import map, reduce


def zip(*seqs: Sequence[Any]) -> List[Tuple[Any, ...]]:
    """
    groups the i-th elements of every sequence into tuples.
    the result is as long as the longest input; shorter inputs are padded with ABSENT.
    """
    for seq in seqs:
        require_sequence(seq, 'zip')
    length = reduce(map(seqs, len), max, 0)

    def row(index):
        return tuple(map(seqs, lambda seq: seq[index] if index < len(seq) else ABSENT))

    return map(range(length), row)
