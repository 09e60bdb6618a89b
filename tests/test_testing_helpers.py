"""Tests for querystate.testing — virtual clock and navigation assertions."""

import pytest

from querystate.navigation import HtmxNavigator, MemoryHistory
from querystate.testing import (
    ManualScheduler,
    ScheduledCall,
    assert_hx_history,
    assert_navigated,
    assert_no_navigation,
)


class TestManualScheduler:
    def test_fires_when_due(self) -> None:
        clock = ManualScheduler()
        fired: list[str] = []
        clock.call_later(1.0, lambda: fired.append("a"))
        assert clock.advance(0.5) == 0
        assert clock.advance(0.5) == 1
        assert fired == ["a"]
        assert clock.now == 1.0

    def test_fires_in_time_order(self) -> None:
        clock = ManualScheduler()
        fired: list[str] = []
        clock.call_later(2.0, lambda: fired.append("late"))
        clock.call_later(1.0, lambda: fired.append("early"))
        assert clock.advance(5) == 2
        assert fired == ["early", "late"]

    def test_cancelled_call_never_fires(self) -> None:
        clock = ManualScheduler()
        fired: list[str] = []
        call = clock.call_later(1.0, lambda: fired.append("x"))
        assert isinstance(call, ScheduledCall)
        call.cancel()
        assert clock.pending == 0
        clock.advance(2)
        assert fired == []

    def test_cancelled_calls_are_not_retained(self) -> None:
        clock = ManualScheduler()
        for _ in range(100):
            clock.call_later(1.0, lambda: None).cancel()
        clock.call_later(1.0, lambda: None)
        assert len(clock._calls) == 1
        assert clock.pending == 1

    def test_callback_can_schedule_more(self) -> None:
        clock = ManualScheduler()
        fired: list[str] = []

        def first() -> None:
            fired.append("first")
            clock.call_later(0.0, lambda: fired.append("second"))

        clock.call_later(1.0, first)
        assert clock.advance(1.0) == 2
        assert fired == ["first", "second"]

    def test_pending_count(self) -> None:
        clock = ManualScheduler()
        clock.call_later(1.0, lambda: None)
        clock.call_later(2.0, lambda: None)
        assert clock.pending == 2
        clock.advance(1.0)
        assert clock.pending == 1


class TestAssertNavigated:
    def test_passes(self) -> None:
        history = MemoryHistory()
        history.push("/a?x=1")
        assert_navigated(history, "/a?x=1")
        assert_navigated(history, "/a?x=1", replace=False)

    def test_fails_without_writes(self) -> None:
        with pytest.raises(AssertionError, match="No navigation recorded"):
            assert_navigated(MemoryHistory(), "/a")

    def test_fails_for_wrong_url(self) -> None:
        history = MemoryHistory()
        history.push("/a")
        with pytest.raises(AssertionError, match="Expected last navigation"):
            assert_navigated(history, "/b")

    def test_fails_for_wrong_primitive(self) -> None:
        history = MemoryHistory()
        history.replace("/a")
        with pytest.raises(AssertionError, match="Expected a push"):
            assert_navigated(history, "/a", replace=False)


class TestAssertNoNavigation:
    def test_passes(self) -> None:
        assert_no_navigation(MemoryHistory())

    def test_fails(self) -> None:
        history = MemoryHistory()
        history.push("/a")
        with pytest.raises(AssertionError, match="Expected no navigation"):
            assert_no_navigation(history)


class TestAssertHxHistory:
    def test_passes(self) -> None:
        nav = HtmxNavigator("/")
        nav.push("/?page=2")
        assert_hx_history(nav, "HX-Push-Url", "/?page=2")

    def test_fails_for_missing_header(self) -> None:
        nav = HtmxNavigator("/")
        nav.push("/?page=2")
        with pytest.raises(AssertionError, match="No HX-Replace-Url header"):
            assert_hx_history(nav, "HX-Replace-Url", "/?page=2")

    def test_fails_for_wrong_url(self) -> None:
        nav = HtmxNavigator("/")
        nav.replace("/?page=2")
        with pytest.raises(AssertionError, match="Expected HX-Replace-Url"):
            assert_hx_history(nav, "HX-Replace-Url", "/?page=3")
