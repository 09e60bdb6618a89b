"""Tests for querystate template helpers (state_url, state_link)."""

from __future__ import annotations

import pytest
from kida import Environment

from querystate.controller import RouteState
from querystate.navigation import MemoryHistory
from querystate.schema import integer, minimum, number, shape, string
from querystate.templating.filters import FILTERS, GLOBALS, register, state_link, state_url

Products = shape(
    q=string().default(""),
    page=number(integer, minimum(1)).default(1),
)


@pytest.fixture
def route() -> RouteState:
    return RouteState(Products, MemoryHistory("/products?page=3"))


def _make_env() -> Environment:
    return register(Environment(autoescape=True))


# ── state_url ─────────────────────────────────────────────────────────────


class TestStateUrl:
    def test_merges_partial(self, route: RouteState) -> None:
        assert state_url(route, page=4) == "/products?page=4"

    def test_default_elided(self, route: RouteState) -> None:
        assert state_url(route, page=1) == "/products"

    def test_no_partial_is_current_url(self, route: RouteState) -> None:
        assert state_url(route) == "/products?page=3"


# ── state_link ────────────────────────────────────────────────────────────


class TestStateLink:
    def test_renders_anchor(self, route: RouteState) -> None:
        html = str(state_link(route, "Next", page=4))
        assert html == '<a href="/products?page=4">Next</a>'

    def test_active_link_marked(self, route: RouteState) -> None:
        html = str(state_link(route, "Page 3", page=3))
        assert 'aria-current="page"' in html

    def test_class_attribute(self, route: RouteState) -> None:
        html = str(state_link(route, "Next", cls="pager next", page=4))
        assert 'class="pager next"' in html

    def test_text_escaped(self, route: RouteState) -> None:
        html = str(state_link(route, "<b>4</b>", page=4))
        assert "&lt;b&gt;4&lt;/b&gt;" in html

    def test_href_escaped(self, route: RouteState) -> None:
        html = str(state_link(route, "Both", q="a", page=4))
        assert 'href="/products?q=a&amp;page=4"' in html

    def test_returns_markup(self, route: RouteState) -> None:
        assert hasattr(state_link(route, "x"), "__html__")


# ── registration ──────────────────────────────────────────────────────────


class TestRegister:
    def test_tables(self) -> None:
        assert FILTERS["state_url"] is state_url
        assert GLOBALS["state_link"] is state_link

    def test_returns_env(self) -> None:
        env = Environment()
        assert register(env) is env

    def test_filter_in_template(self, route: RouteState) -> None:
        tpl = _make_env().from_string("{{ route | state_url(page=4) }}")
        assert tpl.render({"route": route}).strip() == "/products?page=4"

    def test_global_in_template(self, route: RouteState) -> None:
        tpl = _make_env().from_string('{{ state_link(route, "Next", page=4) }}')
        html = tpl.render({"route": route}).strip()
        assert html == '<a href="/products?page=4">Next</a>'
