from __future__ import annotations
import typing
import numpy as np
import pandas as pd
from ..types import *
from .core import map, filter

if typing.TYPE_CHECKING:
    from ..chaining import Chain


class TerminalAccessor(Generic[T]):
    """conversions that end a chain: chain.to.list(), chain.to.df(), ..."""

    def __init__(self, chain_instance: 'Chain[T]'):
        self._chain = chain_instance

    def _values(self) -> List[T]:
        data = self._chain._get_data()
        return map(data, lambda value: value)

    def list(self) -> List[T]:
        """element values as a new list (mapping values for a wrapped mapping)"""
        return self._values()

    def set(self) -> Set[T]:
        return set(self._values())

    def dict(self, key_selector: KeySelector[T, K],
             value_selector: Optional[Selector] = None) -> Dict[K, Any]:
        """convert to dictionary"""
        val_sel = value_selector if value_selector else lambda item: item
        return {key_selector(item): val_sel(item) for item in self._values()}

    def array(self) -> np.ndarray:
        """convert to numpy array"""
        return np.array(self._values())

    def pandas(self) -> pd.Series:
        """
        convert to pandas series. a wrapped mapping keeps its keys as the index,
        a sequence gets the default range index.
        """
        data = self._chain._get_data()
        if is_mapping(data):
            return pd.Series(dict(data))
        return pd.Series(self._values())

    def df(self) -> pd.DataFrame:
        """convert a sequence of records (mappings) to a pandas dataframe"""
        return pd.DataFrame(self._values())

    def count(self, predicate: Optional[Predicate] = None) -> int:
        """number of elements, or of elements passing predicate"""
        if predicate is None:
            return len(self._chain._get_data())
        return len(filter(self._chain._get_data(), predicate))
