"""A virtual clock for exercising debounced navigation without sleeping."""

from collections.abc import Callable
from dataclasses import dataclass, field


@dataclass(slots=True)
class ScheduledCall:
    """A callback waiting on a ``ManualScheduler``."""

    when: float
    callback: Callable[[], None]
    cancelled: bool = field(default=False)

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Scheduler whose time only moves when the test says so.

    Example::

        clock = ManualScheduler()
        route = RouteState(Search, history, config=ControllerConfig(delay=0.3), scheduler=clock)
        route.merge({"q": "a"})
        route.merge({"q": "ab"})
        clock.advance(0.3)
        assert history.writes[-1].url == "/?q=ab"
    """

    __slots__ = ("_calls", "now")

    def __init__(self) -> None:
        self.now = 0.0
        self._calls: list[ScheduledCall] = []

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledCall:
        self._prune()
        call = ScheduledCall(self.now + delay, callback)
        self._calls.append(call)
        return call

    def _prune(self) -> None:
        self._calls = [call for call in self._calls if not call.cancelled]

    @property
    def pending(self) -> int:
        """Number of callbacks that have neither fired nor been cancelled."""
        return sum(1 for call in self._calls if not call.cancelled)

    def advance(self, seconds: float) -> int:
        """Move time forward, firing due callbacks in order. Returns how many fired."""
        self.now += seconds
        fired = 0
        while True:
            self._prune()
            due = [c for c in self._calls if c.when <= self.now]
            if not due:
                return fired
            call = min(due, key=lambda c: c.when)
            self._calls.remove(call)
            call.callback()
            fired += 1
