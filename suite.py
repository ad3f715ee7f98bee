"""
a tiny test registry shared by the underbar_tests modules.

each module registers cases with @case("description") and ends with
`if __name__ == "__main__": suite.run(...)`, so a module can be run as a script.
cases are plain zero-argument test_* functions that raise AssertionError,
which also makes them collectable by pytest.
"""
import time
import traceback
from typing import Any, Callable, List, NamedTuple, Optional

GREEN = '\033[92m'
RED = '\033[91m'
YELLOW = '\033[93m'
BLUE = '\033[94m'
GREY = '\033[90m'
RESET = '\033[0m'


class CaseAssertionError(AssertionError):
    """assertion failure raised by assert_that, kept apart from unexpected errors."""


class Case(NamedTuple):
    description: str
    func: Callable[[], Any]


class Outcome(NamedTuple):
    description: str
    error: Optional[str]

    @property
    def passed(self) -> bool:
        return self.error is None


# cases registered since the last run()
_pending: List[Case] = []


def case(description: str) -> Callable:
    """decorator registering a function as a test case. the function itself is returned untouched."""

    def register(func: Callable) -> Callable:
        _pending.append(Case(description, func))
        return func

    return register


def assert_that(condition: Any, message: str = "assertion failed") -> None:
    if not condition:
        raise CaseAssertionError(message)


def raises(error_type: type, func: Callable, *args, **kwargs) -> BaseException:
    """call func and return the error it raised; fail if it raised nothing or something else."""
    try:
        func(*args, **kwargs)
    except error_type as e:
        return e
    raise CaseAssertionError(f"expected {error_type.__name__} from {getattr(func, '__name__', func)}")


def _execute(item: Case, verbose: bool) -> Outcome:
    try:
        item.func()
    except CaseAssertionError as e:
        return Outcome(item.description, f"assertion failed: {e}")
    except Exception as e:
        if verbose:
            traceback.print_exc()
        return Outcome(item.description, f"{type(e).__name__}: {e}")
    return Outcome(item.description, None)


class Report:
    """collects outcomes as they arrive and prints one line per case"""

    def __init__(self, title: str):
        self.title = title
        self.outcomes: List[Outcome] = []
        self._started = time.perf_counter()
        print(f"\n{BLUE}--- {title} ---{RESET}")

    def add(self, outcome: Outcome) -> None:
        self.outcomes.append(outcome)
        if outcome.passed:
            print(f"  {GREEN}pass{RESET}  {outcome.description}")
        else:
            print(f"  {RED}FAIL{RESET}  {outcome.description}")
            print(f"    {GREY}-> {outcome.error}{RESET}")

    @property
    def failures(self) -> List[Outcome]:
        return [o for o in self.outcomes if not o.passed]

    def close(self) -> bool:
        elapsed = (time.perf_counter() - self._started) * 1000
        failed = len(self.failures)
        colour = GREEN if failed == 0 else RED
        print(f"\n{colour}{len(self.outcomes) - failed}/{len(self.outcomes)} cases passed"
              f"{RESET} {GREY}in {YELLOW}{elapsed:.2f}ms{RESET}")
        for outcome in self.failures:
            print(f"  {RED}x{RESET} {outcome.description}")
        print()
        return failed == 0


def run(title: str = "test run", verbose: bool = False) -> bool:
    """runs and then forgets every registered case. returns whether all passed."""
    report = Report(title)
    while _pending:
        report.add(_execute(_pending.pop(0), verbose))
    return report.close()
