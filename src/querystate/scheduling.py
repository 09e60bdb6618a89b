"""Timer scheduling for debounced navigation.

The controller owns at most one pending timer. All it needs from a
scheduler is ``call_later`` returning something it can ``cancel()``;
``asyncio.TimerHandle`` already has that shape.
"""

import asyncio
from collections.abc import Callable
from typing import Protocol

from querystate.errors import ConfigurationError


class Cancellable(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Protocol for a single-threaded callback scheduler."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> Cancellable: ...


class AsyncioScheduler:
    """Schedule on the running asyncio loop.

    Resolved on every call, so one scheduler can serve controllers
    created before the loop started.
    """

    __slots__ = ()

    def call_later(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            msg = (
                "Debounced navigation needs a running asyncio event loop. "
                "Pass scheduler= explicitly or set ControllerConfig(delay=None)."
            )
            raise ConfigurationError(msg) from None
        return loop.call_later(delay, callback)
