"""Tests for querystate.navigation — locations, history and htmx headers."""

import pytest

from querystate.navigation import (
    HistoryWrite,
    HtmxNavigator,
    Location,
    MemoryHistory,
    NavigateOptions,
    Navigator,
    split_url,
)


class TestSplitUrl:
    @pytest.mark.parametrize(
        ("url", "expected"),
        [
            ("/search?q=x", ("/search", "q=x")),
            ("/search", ("/search", "")),
            ("/search?q=x#top", ("/search", "q=x")),
            ("https://example.com/a?b=1", ("/a", "b=1")),
            ("?page=2", ("/", "page=2")),
            ("", ("/", "")),
        ],
    )
    def test_split(self, url: str, expected: tuple[str, str]) -> None:
        assert split_url(url) == expected


class TestNavigateOptions:
    def test_defaults(self) -> None:
        options = NavigateOptions()
        assert options.replace is False
        assert options.scroll is None


class TestMemoryHistory:
    def test_initial_state(self) -> None:
        history = MemoryHistory("/p?x=1")
        assert history.url == "/p?x=1"
        assert history.pathname == "/p"
        assert history.search == "x=1"
        assert history.entries == ("/p?x=1",)
        assert history.index == 0
        assert history.writes == ()

    def test_default_url(self) -> None:
        assert MemoryHistory().url == "/"

    def test_push_appends(self) -> None:
        history = MemoryHistory("/a")
        history.push("/b")
        assert history.entries == ("/a", "/b")
        assert history.index == 1
        assert history.writes == (HistoryWrite("/b", replace=False, scroll=None),)

    def test_replace_overwrites(self) -> None:
        history = MemoryHistory("/a")
        history.replace("/b", scroll=False)
        assert history.entries == ("/b",)
        assert history.writes == (HistoryWrite("/b", replace=True, scroll=False),)

    def test_back_and_forward(self) -> None:
        history = MemoryHistory("/a")
        history.push("/b")
        history.back()
        assert history.url == "/a"
        history.forward()
        assert history.url == "/b"

    def test_go_is_clamped(self) -> None:
        history = MemoryHistory("/a")
        history.push("/b")
        history.go(-10)
        assert history.index == 0
        history.go(10)
        assert history.index == 1

    def test_push_after_back_drops_forward_entries(self) -> None:
        history = MemoryHistory("/a")
        history.push("/b")
        history.push("/c")
        history.go(-2)
        history.push("/d")
        assert history.entries == ("/a", "/d")

    def test_back_is_not_a_write(self) -> None:
        history = MemoryHistory("/a")
        history.push("/b")
        history.back()
        assert len(history.writes) == 1

    def test_satisfies_protocols(self) -> None:
        history = MemoryHistory()
        assert isinstance(history, Location)
        assert isinstance(history, Navigator)

    def test_repr(self) -> None:
        assert "/a" in repr(MemoryHistory("/a"))


class TestHtmxNavigator:
    def test_no_navigation_no_headers(self) -> None:
        assert HtmxNavigator("/search?q=x").headers == ()

    def test_location(self) -> None:
        nav = HtmxNavigator("/search?q=x")
        assert nav.pathname == "/search"
        assert nav.search == "q=x"

    def test_push_sets_push_header(self) -> None:
        nav = HtmxNavigator("/search")
        nav.push("/search?page=2")
        assert nav.headers == (("HX-Push-Url", "/search?page=2"),)

    def test_replace_sets_replace_header(self) -> None:
        nav = HtmxNavigator("/search")
        nav.replace("/search?page=2")
        assert nav.headers == (("HX-Replace-Url", "/search?page=2"),)

    def test_last_write_wins(self) -> None:
        nav = HtmxNavigator("/search")
        nav.push("/search?page=2")
        nav.replace("/search?page=3")
        assert dict(nav.headers) == {"HX-Replace-Url": "/search?page=3"}

    def test_location_follows_navigation(self) -> None:
        nav = HtmxNavigator("/search")
        nav.push("/search?page=2")
        assert nav.url == "/search?page=2"
        assert nav.search == "page=2"

    def test_full_request_url(self) -> None:
        nav = HtmxNavigator("https://example.com/search?q=x")
        assert nav.pathname == "/search"

    def test_satisfies_protocols(self) -> None:
        nav = HtmxNavigator("/")
        assert isinstance(nav, Location)
        assert isinstance(nav, Navigator)
