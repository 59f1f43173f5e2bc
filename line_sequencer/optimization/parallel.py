"""Fan-out/fan-in helpers and the search budget.

Multi-start iterations, strategy benchmarks and line × objective solves are
independent of each other. fan_out() runs them on a thread pool and returns
results in input order; picking the minimum score afterwards is the only
synchronization point.
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, List, Optional, TypeVar
import threading
import time

T = TypeVar('T')
R = TypeVar('R')


@dataclass
class Failure:
    """Exception captured by fan_out(capture_errors=True)."""
    item: Any
    error: BaseException


def fan_out(
    fn: Callable[[T], R],
    items: Iterable[T],
    max_workers: int = 1,
    capture_errors: bool = False,
) -> List[Any]:
    """
    Apply fn to every item, optionally on a worker pool.

    Args:
        fn: Work function, must not share mutable state across calls
        items: Inputs
        max_workers: Thread count (1 = run inline, no pool)
        capture_errors: Return a Failure in place of a raised exception
            instead of propagating it

    Returns:
        Results in the same order as items
    """
    items = list(items)

    def run(item):
        if not capture_errors:
            return fn(item)
        try:
            return fn(item)
        except Exception as e:
            return Failure(item=item, error=e)

    if max_workers <= 1 or len(items) <= 1:
        return [run(item) for item in items]

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        return list(executor.map(run, items))


@dataclass
class SearchBudget:
    """
    Node cap, deadline and cancellation for one branch-and-bound solve.

    Attributes:
        max_nodes: Hard cap on nodes explored
        deadline_seconds: Wall-clock limit from start() (None = no limit)
        cancel_event: Set by another thread to abort the search
        nodes: Nodes explored so far
        stop_reason: 'node_budget', 'deadline' or 'cancelled' once stopped
    """
    max_nodes: int
    deadline_seconds: Optional[float] = None
    cancel_event: Optional[threading.Event] = None
    nodes: int = 0
    stop_reason: Optional[str] = None
    _deadline: Optional[float] = field(default=None, repr=False)

    # Clock checks are throttled; the node cap is checked on every tick
    CHECK_EVERY = 256

    def start(self) -> 'SearchBudget':
        self.nodes = 0
        self.stop_reason = None
        if self.deadline_seconds is not None:
            self._deadline = time.monotonic() + self.deadline_seconds
        return self

    @property
    def exhausted(self) -> bool:
        return self.stop_reason is not None

    def tick(self) -> bool:
        """Count one node. Returns False once the search must stop."""
        if self.stop_reason is not None:
            return False

        if self.nodes >= self.max_nodes:
            self.stop_reason = 'node_budget'
            return False

        self.nodes += 1

        if self.nodes == 1 or self.nodes % self.CHECK_EVERY == 0:
            if self.cancel_event is not None and self.cancel_event.is_set():
                self.stop_reason = 'cancelled'
                return False
            if self._deadline is not None and time.monotonic() >= self._deadline:
                self.stop_reason = 'deadline'
                return False

        return True
