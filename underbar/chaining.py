from __future__ import annotations

from .types import *

# --- operations ---
from .extensions import core
from .extensions.objects import extend, defaults
from .extensions.utility import flatten, shuffle, sort_by
from .extensions.zip import zip as zip_sequences

# --- accessors ---
from .extensions.set import SetAccessor
from .extensions.terminal import TerminalAccessor


class Chain(Generic[T]):
    """
    an eager, fluent wrapper around a sequence or mapping.
    collection-producing calls return a new chain; reductions return plain values.

        chain([3, 1, 2]).map(lambda x: x * 2).filter(lambda x: x > 2).to.list()
    """

    def __init__(self, collection: Collection):
        require_collection(collection, 'chain')
        self._collection = collection
        # --- initialize accessors ---
        self.set = SetAccessor(self)
        self.to = TerminalAccessor(self)

    def _get_data(self) -> Collection:
        return self._collection

    def value(self) -> Collection:
        """the wrapped collection itself"""
        return self._collection

    def __iter__(self) -> Iterator[Any]:
        return iter(self.to.list())

    def __len__(self) -> int:
        return len(self._collection)

    def __repr__(self) -> str:
        return f"Chain({self._collection!r})"

    # --- eager side effects ---

    def each(self, visit: Visitor) -> 'Chain[T]':
        """runs visit over every element now and returns this same chain"""
        core.each(self._collection, visit)
        return self

    def sort_by(self, key: Union[str, Callable[[T], Any], None] = None) -> 'Chain[T]':
        """sorts the wrapped sequence in place and returns this same chain"""
        sort_by(self._collection, key)
        return self

    # --- collection producing ---

    def filter(self, predicate: Predicate) -> 'Chain[Any]':
        return Chain(core.filter(self._collection, predicate))

    def reject(self, predicate: Predicate) -> 'Chain[Any]':
        return Chain(core.reject(self._collection, predicate))

    def map(self, transform: Selector) -> 'Chain[Any]':
        return Chain(core.map(self._collection, transform))

    def pluck(self, property_name: Any) -> 'Chain[Any]':
        return Chain(core.pluck(self._collection, property_name))

    def invoke(self, method_or_func: Union[str, Callable[..., Any]],
               args: Optional[Iterable[Any]] = None) -> 'Chain[Any]':
        return Chain(core.invoke(self._collection, method_or_func, args))

    def uniq(self) -> 'Chain[T]':
        return Chain(core.uniq(self._collection))

    def flatten(self) -> 'Chain[Any]':
        return Chain(flatten(self._collection))

    def shuffle(self, random_state: Optional[int] = None) -> 'Chain[T]':
        return Chain(shuffle(self._collection, random_state))

    def zip(self, *others: Sequence[Any]) -> 'Chain[Tuple[Any, ...]]':
        return Chain(zip_sequences(self._collection, *others))

    def extend(self, *sources: Mapping[K, V]) -> 'Chain[Any]':
        """merges sources into the wrapped mapping (in place) and keeps chaining on it"""
        return Chain(extend(self._collection, *sources))

    def defaults(self, *sources: Mapping[K, V]) -> 'Chain[Any]':
        return Chain(defaults(self._collection, *sources))

    def first(self, n: Optional[int] = None) -> Any:
        """the first element, or a chain over the first n elements"""
        result = core.first(self._collection, n)
        return result if n is None else Chain(result)

    def last(self, n: Optional[int] = None) -> Any:
        """the last element, or a chain over the last n elements"""
        result = core.last(self._collection, n)
        return result if n is None else Chain(result)

    # --- value producing ---

    def reduce(self, combine: Combiner, *initial: Any) -> Any:
        if len(initial) > 1:
            raise TypeError("reduce() takes at most one initial value")
        return core.reduce(self._collection, combine, *initial)

    def contains(self, target: Any) -> bool:
        return core.contains(self._collection, target)

    def every(self, predicate: Optional[Predicate] = None) -> bool:
        return core.every(self._collection, predicate)

    def some(self, predicate: Optional[Predicate] = None) -> bool:
        return core.some(self._collection, predicate)

    def index_of(self, target: Any) -> int:
        return core.index_of(self._collection, target)

    def pipe(self, func: Callable[..., U], *args, **kwargs) -> U:
        """
        passes this chain to an external function, for custom steps in a pipeline.
        example: .pipe(summarize, title='scores')
        """
        return func(self, *args, **kwargs)
