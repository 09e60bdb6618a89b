"""Template helpers for building query-state links.

Register them on a kida Environment and pass a ``RouteState`` into the
template context::

    from querystate.templating.filters import register

    register(env)

    {{ route | state_url(page=route.state.page + 1) }}
    {{ state_link(route, "Newest", sort_order="desc") }}
"""

from __future__ import annotations

import html
from typing import TYPE_CHECKING, Any

from kida.template import Markup

if TYPE_CHECKING:
    from kida import Environment

    from querystate.controller import RouteState


def state_url(route: RouteState, **partial: Any) -> str:
    """Build a URL for *route* with *partial* merged over its live state.

    Example:
        <a href="{{ route | state_url(page=2) }}">Next</a>
        → <a href="/products?page=2">Next</a>
    """
    return route.build_url(partial)


def state_link(route: RouteState, text: str, cls: str = "", **partial: Any) -> Markup:
    """Render an anchor for *partial*, marked ``aria-current`` when already active.

    Example:
        {{ state_link(route, "Descending", cls="sort", sort_order="desc") }}
        → <a href="/products?sort_order=desc" class="sort">Descending</a>
    """
    attrs = [f' href="{html.escape(route.build_url(partial), quote=True)}"']
    if cls:
        attrs.append(f' class="{html.escape(cls, quote=True)}"')
    if route.is_active(partial):
        attrs.append(' aria-current="page"')
    return Markup(f"<a{''.join(attrs)}>{html.escape(str(text))}</a>")


FILTERS: dict[str, Any] = {
    "state_url": state_url,
}

GLOBALS: dict[str, Any] = {
    "state_link": state_link,
    "state_url": state_url,
}


def register(env: Environment) -> Environment:
    """Install the query-state filters and globals on *env*."""
    env.update_filters(FILTERS)
    for name, value in GLOBALS.items():
        env.add_global(name, value)
    return env
