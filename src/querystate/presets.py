"""Pre-configured schemas and controllers for common list-page patterns.

Each ``*_schema`` extends a caller's ``Object`` with the usual paging or
sorting fields; each ``*_route`` wraps the result in a ``RouteState`` with
matching defaults::

    route = search_route(shape(q=string().default("")), history)
    route.merge({"q": "lamp"})   # debounced 300 ms, page back to 1
"""

from dataclasses import replace

from querystate.config import ControllerConfig
from querystate.controller import RouteState
from querystate.navigation import Location, Navigator
from querystate.scheduling import Scheduler
from querystate.schema.nodes import Object, number, string
from querystate.schema.rules import integer, maximum, minimum, one_of

SEARCH_DELAY = 0.3


def search_schema(base: Object) -> Object:
    """Add ``page`` (>= 1, default 1) and ``limit`` (1-100, default 10)."""
    return base.extend(
        page=number(integer, minimum(1)).default(1),
        limit=number(integer, minimum(1), maximum(100)).default(10),
    )


def pagination_schema(base: Object) -> Object:
    """Add ``page`` (>= 1, default 1) and ``offset`` (>= 0, default 0)."""
    return base.extend(
        page=number(integer, minimum(1)).default(1),
        offset=number(integer, minimum(0)).default(0),
    )


def filter_schema(base: Object) -> Object:
    """Add ``sort_by``, ``sort_order`` (``asc``/``desc``) and ``search``."""
    return base.extend(
        sort_by=string().default(""),
        sort_order=string(one_of("asc", "desc")).default("asc"),
        search=string().default(""),
    )


def search_route(
    base: Object,
    location: Location,
    navigator: Navigator | None = None,
    *,
    config: ControllerConfig | None = None,
    scheduler: Scheduler | None = None,
) -> RouteState:
    """Search page: debounced, and any new query returns to page 1."""
    config = config or ControllerConfig(delay=SEARCH_DELAY, reset_keys=("page",))
    return RouteState(search_schema(base), location, navigator, config=config, scheduler=scheduler)


def pagination_route(
    base: Object,
    location: Location,
    navigator: Navigator | None = None,
    *,
    config: ControllerConfig | None = None,
    scheduler: Scheduler | None = None,
) -> RouteState:
    """Paged list: writes immediately."""
    return RouteState(pagination_schema(base), location, navigator, config=config, scheduler=scheduler)


def filter_route(
    base: Object,
    location: Location,
    navigator: Navigator | None = None,
    *,
    config: ControllerConfig | None = None,
    scheduler: Scheduler | None = None,
) -> RouteState:
    """Sortable, filterable list: debounced like search."""
    config = config or ControllerConfig(delay=SEARCH_DELAY)
    schema = filter_schema(base)
    if "page" in schema.fields and not config.reset_keys:
        config = replace(config, reset_keys=("page",))
    return RouteState(schema, location, navigator, config=config, scheduler=scheduler)
