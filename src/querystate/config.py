"""Controller configuration.

ControllerConfig is a frozen dataclass: immutable after creation,
IDE-autocompletable, no string-key dict lookups.
"""

from dataclasses import dataclass
from typing import Literal

from querystate.errors import ConfigurationError

type HistoryMode = Literal["push", "replace"]


@dataclass(frozen=True, slots=True)
class ControllerConfig:
    """Route state controller configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = ControllerConfig(delay=0.3, history="replace", reset_keys=("page",))
    """

    # Debounce window in seconds. None (or 0) writes synchronously.
    delay: float | None = None

    # Navigation primitive used when navigate() is not told explicitly
    history: HistoryMode = "push"
    scroll: bool | None = None

    # Keys returned to their defaults whenever any other key changes
    reset_keys: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.delay is not None and self.delay < 0:
            msg = f"delay must be non-negative, got {self.delay!r}"
            raise ConfigurationError(msg)
        if self.history not in ("push", "replace"):
            msg = f"history must be 'push' or 'replace', got {self.history!r}"
            raise ConfigurationError(msg)

    @property
    def debounced(self) -> bool:
        """True when writes go through the scheduler instead of firing inline."""
        return bool(self.delay)
