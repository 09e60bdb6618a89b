"""Assertion helpers for navigation recorded by ``MemoryHistory`` and ``HtmxNavigator``."""

from querystate.navigation import HtmxNavigator, MemoryHistory


def assert_navigated(history: MemoryHistory, url: str, *, replace: bool | None = None) -> None:
    """Assert the most recent history write went to *url*.

    Pass *replace* to also check which primitive was used.
    """
    assert history.writes, f"No navigation recorded.\nCurrent URL: {history.url!r}"
    last = history.writes[-1]
    assert last.url == url, (
        f"Expected last navigation to {url!r}, got {last.url!r}\n"
        f"All writes: {[w.url for w in history.writes]}"
    )
    if replace is not None:
        expected = "replace" if replace else "push"
        actual = "replace" if last.replace else "push"
        assert expected == actual, f"Expected a {expected} to {url!r}, got a {actual}"


def assert_no_navigation(history: MemoryHistory) -> None:
    """Assert nothing has been pushed or replaced."""
    assert not history.writes, (
        f"Expected no navigation, got {[w.url for w in history.writes]}"
    )


def assert_hx_history(navigator: HtmxNavigator, header: str, url: str) -> None:
    """Assert *navigator* produced ``HX-Push-Url`` / ``HX-Replace-Url`` for *url*."""
    headers = dict(navigator.headers)
    assert header in headers, (
        f"No {header} header.\n"
        f"HX headers: {headers}"
    )
    assert headers[header] == url, (
        f"Expected {header} to be {url!r}, got {headers[header]!r}"
    )
