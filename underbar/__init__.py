r"""
'                 __          __
'   __  ______  ____/ /__  _____/ /_  ____ ______
'  / / / / __ \/ __  / _ \/ ___/ __ \/ __ `/ ___/
' / /_/ / / / / /_/ /  __/ /  / /_/ / /_/ / /
' \__,_/_/ /_/\__,_/\___/_/  /_.___/\__,_/_/

collection and function utilities built on a single iteration primitive.

    import underbar as _
    _.filter([1, 2, 3, 4], lambda x: x % 2 == 0)   # [2, 4]
"""
import logging

# expose the iteration primitive and derived operations
from .extensions.core import (
    identity,
    each,
    first,
    last,
    index_of,
    filter,
    reject,
    uniq,
    map,
    pluck,
    invoke,
    reduce,
    contains,
    every,
    some
)

# object composition
from .extensions.objects import extend, defaults

# function decorators
from .extensions.functions import (
    once,
    memoize,
    delay,
    throttle,
    Once,
    Memoized,
    Throttled
)

# set / array algebra
from .extensions.utility import sort_by, flatten, shuffle
from .extensions.zip import zip
from .extensions.set import intersection, difference

# chaining
from .chaining import Chain
from .factories import chain, from_range, empty, U

# supporting types, schedulers and config
from .types import ABSENT, TimerHandle, Scheduler, UnsupportedKeyType, UnknownMethod
from .schedulers import ThreadingScheduler, AsyncioScheduler, VirtualScheduler
from .config import UnderbarConfig, configure, get_config, reset_config

logging.getLogger(__name__).addHandler(logging.NullHandler())

# define what `import *` does
__all__ = [
    "identity",
    "each",
    "first",
    "last",
    "index_of",
    "filter",
    "reject",
    "uniq",
    "map",
    "pluck",
    "invoke",
    "reduce",
    "contains",
    "every",
    "some",
    "extend",
    "defaults",
    "once",
    "memoize",
    "delay",
    "throttle",
    "Once",
    "Memoized",
    "Throttled",
    "sort_by",
    "flatten",
    "shuffle",
    "zip",
    "intersection",
    "difference",
    "Chain",
    "chain",
    "from_range",
    "empty",
    "U",
    "ABSENT",
    "TimerHandle",
    "Scheduler",
    "UnsupportedKeyType",
    "UnknownMethod",
    "ThreadingScheduler",
    "AsyncioScheduler",
    "VirtualScheduler",
    "UnderbarConfig",
    "configure",
    "get_config",
    "reset_config"
]
