from __future__ import annotations
import logging
import threading
from types import MappingProxyType, MethodType
from functools import update_wrapper
from ..types import *
from ..config import get_config

logger = logging.getLogger(__name__)


class _Wrapper:
    """shared plumbing: metadata copying and method binding"""

    def __init__(self, func: Callable[..., Any]):
        update_wrapper(self, func)
        self._func = func
        # callbacks may re-enter the wrapper, and timers may fire from another thread
        self._lock = threading.RLock()

    @property
    def _name(self) -> str:
        return getattr(self._func, "__name__", repr(self._func))

    def __get__(self, instance, owner=None):
        # bound calls share this wrapper's state, like a function stored on a prototype
        if instance is None:
            return self
        return MethodType(self, instance)


class Once(_Wrapper):
    """calls the wrapped function on the first call only and replays its result afterwards"""

    def __init__(self, func: Callable[..., T]):
        super().__init__(func)
        self._called = False
        self._result = None

    @property
    def called(self) -> bool:
        return self._called

    def __call__(self, *args, **kwargs):
        with self._lock:
            if not self._called:
                # an exception leaves the wrapper un-called so the next call retries
                self._result = self._func(*args, **kwargs)
                self._called = True
            return self._result

    def __repr__(self) -> str:
        return f"Once({self._name}, called={self._called})"


class Memoized(_Wrapper):
    """
    caches results of a one-argument function, keyed by its primitive argument.
    cache keys are (type, value) pairs.
    """

    def __init__(self, func: Callable[[Any], T]):
        super().__init__(func)
        self._cache: Dict[Any, Any] = {}

    @property
    def cache(self) -> Mapping[Any, Any]:
        return MappingProxyType(self._cache)

    def cache_clear(self) -> None:
        with self._lock:
            self._cache.clear()

    def _key(self, args: Tuple[Any, ...], kwargs: Dict[str, Any]) -> Any:
        if kwargs or len(args) != 1:
            raise UnsupportedKeyType(
                f"{self._name} is memoized on a single positional argument, "
                f"got {len(args)} positional and {len(kwargs)} keyword")
        key = args[0]
        if not isinstance(key, PRIMITIVE_TYPES):
            raise UnsupportedKeyType(f"cannot memoize on a {type(key).__name__} argument")
        # 1, 1.0 and True hash alike; the type keeps their slots apart
        return type(key), key

    def __call__(self, *args, **kwargs):
        key = self._key(args, kwargs)
        with self._lock:
            if key in self._cache:
                logger.debug(f"memo hit for {self._name}({args[0]!r})")
                return self._cache[key]
            result = self._func(*args)
            self._cache[key] = result
            return result

    def __repr__(self) -> str:
        return f"Memoized({self._name}, cached={len(self._cache)})"


class Throttled(_Wrapper):
    """
    runs the wrapped function at most once per window of `wait` milliseconds.
    every call re-arms the window timer, so a steady stream of calls faster than
    `wait` keeps the window closed.
    """

    def __init__(self, func: Callable[..., T], wait: float, scheduler: Scheduler):
        super().__init__(func)
        self._wait = wait
        self._scheduler = scheduler
        self._ready = True
        self._result = None
        self._timer: Optional[TimerHandle] = None
        self._generation = 0

    @property
    def ready(self) -> bool:
        """true when the next call will run the wrapped function"""
        return self._ready

    def __call__(self, *args, **kwargs):
        with self._lock:
            if self._ready:
                self._result = self._func(*args, **kwargs)
                self._ready = False
                logger.debug(f"{self._name} ran, window closed for {self._wait}ms")
            self._rearm()
            return self._result

    def _rearm(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
        self._generation += 1
        generation = self._generation
        self._timer = self._scheduler.schedule(lambda: self._reopen(generation), self._wait)

    def _reopen(self, generation: int) -> None:
        with self._lock:
            # a timer that was superseded while already firing must not reopen the window
            if generation != self._generation:
                return
            self._ready = True
            self._timer = None
            logger.debug(f"{self._name} window reopened")

    def cancel(self) -> None:
        """drop the pending timer and reopen the window now"""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
            self._generation += 1
            self._ready = True

    def __repr__(self) -> str:
        return f"Throttled({self._name}, wait={self._wait}, ready={self._ready})"


def once(func: Callable[..., T]) -> Once:
    """wrap func so it runs once; every call returns the first call's result"""
    return Once(func)


def memoize(func: Callable[[Any], T]) -> Memoized:
    """wrap a one-argument func so each distinct primitive argument is computed once"""
    return Memoized(func)


def delay(func: Callable[..., Any], wait: float, *args: Any,
          scheduler: Optional[Scheduler] = None, **kwargs: Any) -> TimerHandle:
    """
    call func(*args, **kwargs) once, no earlier than `wait` milliseconds from now.
    returns immediately with a handle whose cancel() stops the call if it has not fired.
    `scheduler` is taken by delay itself; to hand func a keyword of that name,
    bind it first with functools.partial.
    """
    target = scheduler or get_config().scheduler
    logger.debug(f"delaying {getattr(func, '__name__', func)!s} by {wait}ms")
    return target.schedule(lambda: func(*args, **kwargs), wait)


def throttle(func: Callable[..., T], wait: float, scheduler: Optional[Scheduler] = None) -> Throttled:
    """wrap func so it executes at most once per `wait` millisecond window"""
    return Throttled(func, wait, scheduler or get_config().scheduler)
