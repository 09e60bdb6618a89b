"""Route state controller — typed query state over a live location.

The controller keeps no copy of the state. Every read decodes the
location's current query string, so a back/forward navigation by the
user is visible on the next access. Take a fresh read after any
``await``; never hold ``route.state`` across a suspension point.

Writes go through the host ``Navigator``. With ``ControllerConfig(delay=...)``
they are debounced: each call arms one timer and cancels the previous
pending write (last write wins), so typing into a search box produces
one history entry instead of one per keystroke.

Usage::

    history = MemoryHistory("/products?page=3")
    route = RouteState(Products, history, config=ControllerConfig(reset_keys=("page",)))

    route.state                     # {"q": "", "page": 3}
    route.build_url({"page": 4})    # "/products?page=4"
    route.merge({"q": "lamp"})      # pushes "/products?q=lamp" (page reset)
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from querystate.bag import ParamBag
from querystate.codec import TypedState, decode, encode, same_value
from querystate.config import ControllerConfig
from querystate.errors import ConfigurationError
from querystate.navigation import Location, NavigateOptions, Navigator
from querystate.scheduling import AsyncioScheduler, Cancellable, Scheduler
from querystate.schema.nodes import Object, Schema, Union, is_absent, unwrap_optional
from querystate.schema.result import ValidationResult

logger = logging.getLogger("querystate.controller")


class RouteState:
    """Read, build and navigate typed query state for one route.

    Args:
        schema: An ``Object`` (or ``Union`` of objects) describing the
            query string. Write operations need an ``Object``.
        location: Source of the live ``pathname`` / ``search``.
        navigator: The push/replace primitive. Defaults to *location*
            when it can navigate too (``MemoryHistory``, ``HtmxNavigator``).
        base_path: Path URLs are built against. Defaults to the
            location's current pathname.
        config: Debounce, history mode and reset keys.
        scheduler: Timer source for debounced writes. Defaults to the
            running asyncio loop.
    """

    __slots__ = (
        "_base_path",
        "_config",
        "_location",
        "_navigator",
        "_pending",
        "_pending_write",
        "_scheduler",
        "schema",
    )

    def __init__(
        self,
        schema: Schema,
        location: Location,
        navigator: Navigator | None = None,
        *,
        base_path: str | None = None,
        config: ControllerConfig | None = None,
        scheduler: Scheduler | None = None,
    ) -> None:
        if navigator is None:
            if not isinstance(location, Navigator):
                msg = (
                    f"{type(location).__name__} cannot navigate; "
                    "pass navigator= with push() and replace() methods"
                )
                raise ConfigurationError(msg)
            navigator = location
        self.schema = schema
        self._location = location
        self._navigator = navigator
        self._base_path = base_path
        self._config = config or ControllerConfig()
        self._scheduler: Scheduler = scheduler or AsyncioScheduler()
        self._pending: Cancellable | None = None
        self._pending_write: tuple[str, NavigateOptions] | None = None

    def __repr__(self) -> str:
        return f"RouteState(base_path={self.base_path!r}, pending={self.pending})"

    # -- Read path --

    @property
    def config(self) -> ControllerConfig:
        return self._config

    @property
    def state(self) -> TypedState:
        """Decode of the live query string. Fresh on every access."""
        return decode(self.schema, self._location.search)

    @property
    def defaults(self) -> TypedState:
        """What the schema decodes to with an empty query string."""
        return decode(self.schema, ParamBag())

    @property
    def base_path(self) -> str:
        return self._base_path or self._location.pathname

    def search_params(self, partial: Mapping[str, Any] | None = None) -> ParamBag:
        """Encode the live state with *partial* merged over it."""
        return encode(self.schema, self.state, partial)

    def build_url(self, partial: Mapping[str, Any] | None = None) -> str:
        """``base_path?query``, or the bare base path when nothing differs from defaults."""
        return self._join(self.search_params(partial))

    def build_relative_url(self, partial: Mapping[str, Any] | None = None) -> str:
        """``?query`` only, or ``""`` when nothing differs from defaults."""
        query = self.search_params(partial).to_query_string()
        return f"?{query}" if query else ""

    def current_url(self) -> str:
        return self.build_url()

    def is_active(self, partial: Mapping[str, Any]) -> bool:
        """True when every key in *partial* equals the live state.

        Lists must match in length and order; ``["a", "b"]`` is not
        active for a state holding ``["b", "a"]``.
        """
        state = self.state
        for key, value in partial.items():
            current = state.get(key)
            if is_absent(value) and is_absent(current):
                continue
            if not same_value(current, value):
                return False
        return True

    def validate(self, raw: Any) -> ValidationResult:
        """Validate a candidate value against the full schema."""
        return self.schema.validate(raw)

    def validate_partial(self, raw: Any) -> ValidationResult:
        """Validate a candidate value where every field may be absent."""
        target = unwrap_optional(self.schema)
        match target:
            case Object():
                return target.partial().validate(raw)
            case Union(variants=variants):
                return Union(tuple(v.partial() for v in variants)).validate(raw)
        return self.schema.validate(raw)

    # -- Write path --

    def navigate(
        self,
        partial: Mapping[str, Any] | None = None,
        *,
        replace: bool | None = None,
        scroll: bool | None = None,
    ) -> None:
        """Navigate to the live state with *partial* merged over it.

        *replace* and *scroll* fall back to the controller config.
        """
        url = self.build_url(self._with_resets(partial))
        self._dispatch(url, self._options(replace, scroll))

    def push(self, partial: Mapping[str, Any] | None = None, *, scroll: bool | None = None) -> None:
        self.navigate(partial, replace=False, scroll=scroll)

    def replace(self, partial: Mapping[str, Any] | None = None, *, scroll: bool | None = None) -> None:
        self.navigate(partial, replace=True, scroll=scroll)

    def merge(self, partial: Mapping[str, Any]) -> None:
        self.navigate(partial)

    def set(self, full: Mapping[str, Any]) -> None:
        """Navigate to exactly *full*; keys it leaves out fall back to defaults."""
        url = self._join(encode(self.schema, full))
        self._dispatch(url, self._options(None, None))

    def reset(self) -> None:
        """Navigate to the bare base path."""
        self._dispatch(self.base_path, self._options(None, None))

    def clear(self, keys: Iterable[str]) -> None:
        """Return *keys* to their schema defaults (or drop them when they have none)."""
        defaults = self.defaults
        self.navigate({key: defaults.get(key) for key in keys})

    # -- Pending navigation --

    @property
    def pending(self) -> bool:
        """True while a debounced navigation is waiting to fire."""
        return self._pending is not None

    def cancel(self) -> None:
        """Drop the pending navigation, if any."""
        if self._pending is not None:
            self._pending.cancel()
            logger.debug("pending navigation cancelled")
        self._pending = None
        self._pending_write = None

    def flush(self) -> None:
        """Fire the pending navigation now instead of waiting for the timer."""
        if self._pending is None or self._pending_write is None:
            return
        self._pending.cancel()
        self._fire()

    # -- Internals --

    def _join(self, bag: ParamBag) -> str:
        query = bag.to_query_string()
        base = self.base_path
        return f"{base}?{query}" if query else base

    def _options(self, replace: bool | None, scroll: bool | None) -> NavigateOptions:
        if replace is None:
            replace = self._config.history == "replace"
        if scroll is None:
            scroll = self._config.scroll
        return NavigateOptions(replace=replace, scroll=scroll)

    def _with_resets(self, partial: Mapping[str, Any] | None) -> Mapping[str, Any] | None:
        """Add reset keys (at their defaults) when *partial* changes anything else."""
        reset_keys = self._config.reset_keys
        if not partial or not reset_keys:
            return partial
        if any(key in partial for key in reset_keys):
            return partial
        state = self.state
        changed = any(
            key not in reset_keys and not same_value(value, state.get(key))
            for key, value in partial.items()
        )
        if not changed:
            return partial
        defaults = self.defaults
        return {**partial, **{key: defaults.get(key) for key in reset_keys}}

    def _dispatch(self, url: str, options: NavigateOptions) -> None:
        if not self._config.debounced:
            self._write(url, options)
            return
        # Arm first: if the scheduler raises, the earlier write stays pending
        handle = self._scheduler.call_later(self._config.delay or 0.0, self._fire)
        if self._pending is not None:
            self._pending.cancel()
            logger.debug("coalesced pending navigation into %s", url)
        self._pending = handle
        self._pending_write = (url, options)

    def _fire(self) -> None:
        write = self._pending_write
        self._pending = None
        self._pending_write = None
        if write is not None:
            self._write(*write)

    def _write(self, url: str, options: NavigateOptions) -> None:
        logger.debug("%s %s", "replace" if options.replace else "push", url)
        if options.replace:
            self._navigator.replace(url, scroll=options.scroll)
        else:
            self._navigator.push(url, scroll=options.scroll)
