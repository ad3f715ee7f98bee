import asyncio
import functools
import math
import threading

import suite
import underbar as _
from underbar import VirtualScheduler

case = suite.case
assert_that = suite.assert_that


class _Counter:
    """records every call made to it"""
    def __init__(self, result=None):
        self.calls = []
        self._result = result

    def __call__(self, *args, **kwargs):
        self.calls.append((args, kwargs))
        return self._result if self._result is not None else len(self.calls)


# --- once ---

@case("once runs the function a single time and replays the result")
def test_once_single_call():
    counter = _Counter()
    wrapped = _.once(counter)
    results = [wrapped(i) for i in range(5)]
    assert_that(len(counter.calls) == 1, f"called {len(counter.calls)} times")
    assert_that(counter.calls[0] == ((0,), {}), "first call's arguments used")
    assert_that(results == [1] * 5, f"got {results}")
    assert_that(wrapped.called, "called flag set")


@case("once retries when the first call raised")
def test_once_retry_after_error():
    attempts = []

    def flaky():
        attempts.append(1)
        if len(attempts) == 1:
            raise RuntimeError("first attempt fails")
        return 'ok'

    wrapped = _.once(flaky)
    suite.raises(RuntimeError, wrapped)
    assert_that(not wrapped.called, "failed call does not count")
    assert_that(wrapped() == 'ok' and wrapped() == 'ok', "second attempt cached")
    assert_that(len(attempts) == 2, f"attempts: {len(attempts)}")


@case("once keeps the wrapped function's metadata")
def test_once_metadata():
    def greet():
        """say hello"""
        return 'hi'
    wrapped = _.once(greet)
    assert_that(wrapped.__name__ == 'greet' and wrapped.__doc__ == 'say hello', "name and doc copied")


@case("once on a method receives self and shares state across instances")
def test_once_method():
    class Service:
        def __init__(self, name): self.name = name

        @_.once
        def start(self):
            return f"started {self.name}"

    first, second = Service('a'), Service('b')
    assert_that(first.start() == 'started a', "receiver forwarded")
    assert_that(second.start() == 'started a', "one wrapper, one result")


# --- memoize ---

@case("memoize computes once per distinct argument")
def test_memoize_distinct_arguments():
    counter = _Counter()
    square = _.memoize(lambda n: counter(n) and n * n)
    results = [square(n) for n in [2, 3, 2, 2, 3]]
    assert_that(len(counter.calls) == 2, f"called {len(counter.calls)} times")
    assert_that(results == [4, 9, 4, 4, 9], f"got {results}")
    assert_that(sorted(square.cache.values()) == [4, 9], f"cache: {dict(square.cache)}")


@case("memoize caches falsy results too")
def test_memoize_falsy_result():
    counter = _Counter()

    def is_odd(n):
        counter(n)
        return n % 2 == 1

    wrapped = _.memoize(is_odd)
    assert_that(wrapped(4) is False and wrapped(4) is False, "False result")
    assert_that(len(counter.calls) == 1, "second call served from cache")


@case("memoize cache_clear forgets results")
def test_memoize_cache_clear():
    counter = _Counter()
    wrapped = _.memoize(lambda word: counter(word) and word.upper())
    wrapped('a')
    wrapped.cache_clear()
    wrapped('a')
    assert_that(len(counter.calls) == 2, "recomputed after clear")


@case("memoize rejects arguments it cannot key on")
def test_memoize_unsupported_keys():
    counter = _Counter()
    wrapped = _.memoize(counter)
    suite.raises(_.UnsupportedKeyType, wrapped, [1, 2])
    suite.raises(_.UnsupportedKeyType, wrapped, 1, 2)
    suite.raises(_.UnsupportedKeyType, wrapped, value=1)
    error = suite.raises(TypeError, wrapped)
    assert_that(isinstance(error, _.UnsupportedKeyType), "UnsupportedKeyType is a TypeError")
    assert_that(counter.calls == [], "function never called on misuse")


@case("memoize accepts None and strings as keys")
def test_memoize_primitive_keys():
    wrapped = _.memoize(lambda key: repr(key))
    assert_that(wrapped(None) == 'None' and wrapped('x') == "'x'", "primitive keys")
    assert_that(len(wrapped.cache) == 2, "two entries")


@case("memoize keeps equal values of different types in separate slots")
def test_memoize_type_slots():
    counter = _Counter()

    def type_name(value):
        counter(value)
        return type(value).__name__

    wrapped = _.memoize(type_name)
    names = (wrapped(1), wrapped(True), wrapped(1.0), wrapped(1))
    assert_that(names == ('int', 'bool', 'float', 'int'), f"got {names}")
    assert_that(len(counter.calls) == 3, f"called {len(counter.calls)} times")


# --- delay ---

@case("delay runs the function with its arguments once the wait has passed")
def test_delay_fires():
    clock = VirtualScheduler()
    counter = _Counter()
    handle = _.delay(counter, 100, 'a', 'b', scheduler=clock, flag=True)
    assert_that(counter.calls == [], "nothing runs synchronously")
    clock.advance(99)
    assert_that(counter.calls == [], "not before the wait")
    clock.advance(1)
    assert_that(counter.calls == [(('a', 'b'), {'flag': True})], f"got {counter.calls}")
    assert_that(handle.done and not handle.cancelled, "handle marked done")


@case("delay hands a scheduler keyword to func when bound with partial")
def test_delay_partial_scheduler_keyword():
    clock = VirtualScheduler()
    counter = _Counter()
    _.delay(functools.partial(counter, scheduler='cron'), 10, scheduler=clock)
    clock.advance(10)
    assert_that(counter.calls == [((), {'scheduler': 'cron'})], f"got {counter.calls}")


@case("delay can be cancelled before it fires but not after")
def test_delay_cancel():
    clock = VirtualScheduler()
    counter = _Counter()
    handle = _.delay(counter, 50, scheduler=clock)
    assert_that(handle.cancel(), "first cancel succeeds")
    assert_that(not handle.cancel(), "second cancel is a no-op")
    clock.advance(100)
    assert_that(counter.calls == [], "cancelled call never runs")

    fired = _.delay(counter, 10, scheduler=clock)
    clock.advance(10)
    assert_that(not fired.cancel(), "a fired timer cannot be retracted")
    assert_that(len(counter.calls) == 1, "ran once")


@case("delay uses the configured default scheduler")
def test_delay_default_scheduler():
    clock = VirtualScheduler()
    counter = _Counter()
    _.configure(scheduler=clock)
    try:
        _.delay(counter, 20)
        assert_that(clock.pending == 1, "scheduled on the configured clock")
        clock.advance(20)
        assert_that(len(counter.calls) == 1, "ran")
    finally:
        _.reset_config()


@case("delay on the threading scheduler runs on a timer thread")
def test_delay_threading():
    done = threading.Event()
    handle = _.delay(done.set, 10, scheduler=_.ThreadingScheduler())
    assert_that(done.wait(5), "timer thread should fire")
    assert_that(handle.done, "handle marked done")


@case("delay on the asyncio scheduler runs on the event loop")
def test_delay_asyncio():
    fired = []

    async def main():
        _.delay(fired.append, 5, 'tick', scheduler=_.AsyncioScheduler())
        await asyncio.sleep(0.2)

    asyncio.run(main())
    assert_that(fired == ['tick'], f"got {fired}")


# --- throttle ---

@case("throttle runs immediately, then replays the result inside the window")
def test_throttle_window():
    clock = VirtualScheduler()
    counter = _Counter()
    throttled = _.throttle(counter, 50, scheduler=clock)
    assert_that(throttled('a') == 1, "first call runs")
    clock.advance(10)
    assert_that(throttled('b') == 1, "inside window returns recorded result")
    assert_that(len(counter.calls) == 1, "not re-run inside window")
    assert_that(not throttled.ready, "window closed")


@case("throttle runs again once the window has elapsed")
def test_throttle_reopens():
    clock = VirtualScheduler()
    counter = _Counter()
    throttled = _.throttle(counter, 50, scheduler=clock)
    throttled()
    clock.advance(60)
    assert_that(throttled.ready, "window reopened")
    assert_that(throttled() == 2, "second execution")
    assert_that(len(counter.calls) == 2, "two executions")


@case("every throttled call re-arms the window timer")
def test_throttle_rearm():
    clock = VirtualScheduler()
    counter = _Counter()
    throttled = _.throttle(counter, 50, scheduler=clock)
    throttled()          # t=0, window until 50
    clock.advance(40)
    throttled()          # t=40, window pushed to 90
    clock.advance(40)    # t=80
    throttled()          # window pushed to 130
    assert_that(len(counter.calls) == 1, "still throttled at t=80")
    clock.advance(50)    # t=130
    throttled()
    assert_that(len(counter.calls) == 2, "runs once calls pause for a full window")
    assert_that(clock.pending == 1, "only one live timer at a time")


@case("throttle under a steady stream stays within the execution bound")
def test_throttle_stream_bound():
    clock = VirtualScheduler()
    executions = []

    def sample(t):
        executions.append(t)
        return t

    throttled = _.throttle(sample, 50, scheduler=clock)
    for t in range(100):
        value = throttled(t)
        assert_that(value == executions[-1], f"t={t}: returned {value}, last run {executions[-1]}")
        clock.advance(1)
    assert_that(len(executions) <= math.ceil(100 / 50) + 1, f"ran {len(executions)} times")


@case("throttle cancel reopens the window immediately")
def test_throttle_cancel():
    clock = VirtualScheduler()
    counter = _Counter()
    throttled = _.throttle(counter, 1000, scheduler=clock)
    throttled()
    throttled.cancel()
    assert_that(clock.pending == 0, "timer dropped")
    throttled()
    assert_that(len(counter.calls) == 2, "ran again without waiting")


@case("a throttled function that raises leaves the window open")
def test_throttle_error():
    clock = VirtualScheduler()

    def boom():
        raise ValueError("nope")

    throttled = _.throttle(boom, 50, scheduler=clock)
    suite.raises(ValueError, throttled)
    assert_that(throttled.ready and clock.pending == 0, "no window armed")


# --- schedulers ---

@case("virtual scheduler fires callbacks in due order")
def test_virtual_scheduler_order():
    clock = VirtualScheduler()
    order = []
    clock.schedule(lambda: order.append('late'), 30)
    clock.schedule(lambda: order.append('early'), 10)
    clock.schedule(lambda: order.append('tie'), 10)
    assert_that(clock.advance(30) == 3, "three fired")
    assert_that(order == ['early', 'tie', 'late'], f"got {order}")
    assert_that(clock.now == 30, "clock moved")


@case("virtual scheduler sets now to each callback's due time")
def test_virtual_scheduler_now():
    clock = VirtualScheduler()
    seen = []
    clock.schedule(lambda: seen.append(clock.now), 25)
    clock.advance(100)
    assert_that(seen == [25] and clock.now == 100, f"got {seen}, now={clock.now}")


@case("virtual scheduler run_all drains nested timers and refuses to go backwards")
def test_virtual_scheduler_run_all():
    clock = VirtualScheduler()
    seen = []
    clock.schedule(lambda: clock.schedule(lambda: seen.append(clock.now), 5), 5)
    assert_that(clock.run_all() == 2, "outer and inner fired")
    assert_that(seen == [10], f"got {seen}")
    suite.raises(ValueError, clock.advance, -1)


if __name__ == "__main__":
    suite.run(title="underbar function decorators")
