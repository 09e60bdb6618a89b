"""Navigation primitives — where live state is read from and written to.

A controller needs two things from its host:

- a ``Location`` (the live path and query string, read on every access)
- a ``Navigator`` (``push`` / ``replace`` a URL, fire-and-forget)

No base class required. The controller checks the shape, not the lineage.
Two implementations ship here:

``MemoryHistory``
    An in-process history stack. Useful for tests, CLIs and TUIs that
    keep a URL-like address without a browser.

``HtmxNavigator``
    Server side, per request. Navigations become an ``HX-Push-Url`` or
    ``HX-Replace-Url`` response header that htmx applies in the browser::

        nav = HtmxNavigator(request.url)
        route = RouteState(Search, nav)
        route.merge({"page": 2})
        return Response(body).with_headers(dict(nav.headers))
"""

from dataclasses import dataclass
from typing import Protocol, runtime_checkable
from urllib.parse import urlsplit


@runtime_checkable
class Location(Protocol):
    """The live address: ``pathname`` and ``search`` (no leading ``?``)."""

    @property
    def pathname(self) -> str: ...

    @property
    def search(self) -> str: ...


@runtime_checkable
class Navigator(Protocol):
    """Protocol for the host's navigation primitive."""

    def push(self, url: str, *, scroll: bool | None = None) -> None: ...

    def replace(self, url: str, *, scroll: bool | None = None) -> None: ...


@dataclass(frozen=True, slots=True)
class NavigateOptions:
    """Per-call navigation options."""

    replace: bool = False
    scroll: bool | None = None


def split_url(url: str) -> tuple[str, str]:
    """Split ``/search?q=x#top`` into ``("/search", "q=x")``.

    Scheme and host are dropped; an empty path becomes ``/``.
    """
    parts = urlsplit(url)
    return parts.path or "/", parts.query


# ---------------------------------------------------------------------------
# In-process history
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class HistoryWrite:
    """One call into the navigation primitive, as recorded by ``MemoryHistory``."""

    url: str
    replace: bool
    scroll: bool | None


class MemoryHistory:
    """A browser-like history stack held in memory.

    ``push`` drops any forward entries and appends; ``replace`` overwrites
    the current entry. ``back`` / ``forward`` / ``go`` move the cursor
    without recording a write, like the user pressing the browser buttons.
    """

    __slots__ = ("_entries", "_index", "_writes")

    def __init__(self, initial_url: str = "/") -> None:
        self._entries: list[str] = [initial_url]
        self._index = 0
        self._writes: list[HistoryWrite] = []

    @property
    def url(self) -> str:
        return self._entries[self._index]

    @property
    def pathname(self) -> str:
        return split_url(self.url)[0]

    @property
    def search(self) -> str:
        return split_url(self.url)[1]

    @property
    def entries(self) -> tuple[str, ...]:
        return tuple(self._entries)

    @property
    def index(self) -> int:
        return self._index

    @property
    def writes(self) -> tuple[HistoryWrite, ...]:
        """Every push/replace in call order."""
        return tuple(self._writes)

    def push(self, url: str, *, scroll: bool | None = None) -> None:
        del self._entries[self._index + 1 :]
        self._entries.append(url)
        self._index += 1
        self._writes.append(HistoryWrite(url, replace=False, scroll=scroll))

    def replace(self, url: str, *, scroll: bool | None = None) -> None:
        self._entries[self._index] = url
        self._writes.append(HistoryWrite(url, replace=True, scroll=scroll))

    def go(self, delta: int) -> None:
        """Move the cursor by *delta*, clamped to the stack."""
        self._index = max(0, min(len(self._entries) - 1, self._index + delta))

    def back(self) -> None:
        self.go(-1)

    def forward(self) -> None:
        self.go(1)

    def __repr__(self) -> str:
        return f"MemoryHistory(url={self.url!r}, entries={len(self._entries)})"


# ---------------------------------------------------------------------------
# htmx
# ---------------------------------------------------------------------------


class HtmxNavigator:
    """Turn navigations into htmx history response headers.

    Only one history header is meaningful per response, so the last
    navigation wins. The location follows the navigation, so state read
    after a write reflects the new URL.

    ``scroll`` has no htmx header equivalent and is ignored.
    """

    __slots__ = ("_header", "_url")

    def __init__(self, current_url: str) -> None:
        self._url = current_url
        self._header: tuple[str, str] | None = None

    @property
    def url(self) -> str:
        return self._url

    @property
    def pathname(self) -> str:
        return split_url(self._url)[0]

    @property
    def search(self) -> str:
        return split_url(self._url)[1]

    @property
    def headers(self) -> tuple[tuple[str, str], ...]:
        """``(("HX-Push-Url", url),)``, ``(("HX-Replace-Url", url),)`` or ``()``."""
        if self._header is None:
            return ()
        return (self._header,)

    def push(self, url: str, *, scroll: bool | None = None) -> None:
        self._url = url
        self._header = ("HX-Push-Url", url)

    def replace(self, url: str, *, scroll: bool | None = None) -> None:
        self._url = url
        self._header = ("HX-Replace-Url", url)
