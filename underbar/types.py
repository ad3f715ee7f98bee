import inspect
import threading
from collections.abc import Mapping as _MappingABC, Sequence as _SequenceABC
from typing import (
    TypeVar, Generic, Callable, Iterator, Iterable, Any, Optional, Union,
    Dict, List, Tuple, Set, Type, Protocol, Sequence, Mapping, MutableSequence, MutableMapping
)

import numpy as np

T = TypeVar('T')
U = TypeVar('U')
K = TypeVar('K')
V = TypeVar('V')

Collection = Union[_SequenceABC, _MappingABC]
Visitor = Callable[..., Any]
Predicate = Callable[..., Any]
Selector = Callable[..., U]
KeySelector = Callable[[T], K]
Combiner = Callable[[U, T], U]

# primitive argument types memoize accepts as cache keys
PRIMITIVE_TYPES = (type(None), bool, int, float, complex, str, bytes)


class UnsupportedKeyType(TypeError):
    """raised when a memoized function is called with arguments that cannot be a cache key"""
    pass


class UnknownMethod(AttributeError):
    """raised when invoke is asked for a method the element does not have"""
    pass


class _Absent:
    """placeholder for a position that has no element"""
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool: return False

    def __repr__(self) -> str: return "ABSENT"

    def __reduce__(self):
        return (_Absent, ())


ABSENT = _Absent()


class TimerHandle:
    """cancellable token for a single scheduled callback"""

    def __init__(self, due: float, cancel_func: Optional[Callable[[], Any]] = None):
        self.due = due
        self._cancel_func = cancel_func
        self._lock = threading.Lock()
        self.cancelled = False
        self.done = False

    def cancel(self) -> bool:
        """prevent the callback from running. returns false if it already ran or was cancelled."""
        with self._lock:
            if self.done or self.cancelled:
                return False
            self.cancelled = True
        if self._cancel_func is not None:
            self._cancel_func()
        return True

    def _mark_done(self) -> bool:
        """called by schedulers right before the callback runs. false means skip it."""
        with self._lock:
            if self.cancelled or self.done:
                return False
            self.done = True
            return True

    def __repr__(self) -> str:
        state = 'cancelled' if self.cancelled else 'done' if self.done else 'pending'
        return f"TimerHandle(due={self.due}, {state})"


class Scheduler(Protocol):
    def schedule(self, callback: Callable[[], Any], delay: float) -> TimerHandle:
        """run callback no earlier than delay milliseconds from now"""
        ...


# --- shape helpers ---

def is_mapping(value: Any) -> bool:
    return isinstance(value, _MappingABC)


def is_sequence(value: Any) -> bool:
    """true for lists, tuples, ranges and numpy arrays; strings and bytes are scalars here"""
    if isinstance(value, (str, bytes, bytearray)):
        return False
    return isinstance(value, (_SequenceABC, np.ndarray))


def require_sequence(value: Any, operation: str) -> None:
    if not is_sequence(value):
        raise TypeError(f"{operation}() expects a sequence, got {type(value).__name__}")


def require_collection(value: Any, operation: str) -> None:
    if not (is_sequence(value) or is_mapping(value)):
        raise TypeError(f"{operation}() expects a sequence or mapping, got {type(value).__name__}")


# --- callback arity ---

def fit_arity(func: Callable[..., U], max_args: int = 3) -> Callable[..., U]:
    """
    adapts a callback so it can always be called as func(value, index, collection).
    the callback only receives as many leading arguments as its signature accepts,
    so `lambda x: x > 1` and `lambda v, k, c: ...` both work as predicates.
    """
    try:
        params = inspect.signature(func).parameters.values()
    except (TypeError, ValueError):
        # builtins like bool() expose no signature; they take the value alone
        accepted = 1
    else:
        if any(p.kind == p.VAR_POSITIONAL for p in params):
            accepted = max_args
        else:
            accepted = sum(1 for p in params if p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD))
    accepted = min(accepted, max_args)

    if accepted == max_args:
        return func
    return lambda *args: func(*args[:accepted])
