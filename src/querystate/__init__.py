"""querystate — typed application state, synchronized with the URL query string.

A schema describes the query string; the codec turns raw parameters into
typed state and back (leaving out anything equal to a default); the
controller reads live state from a location and navigates with debounced,
cancellable writes.

Basic usage::

    from querystate import MemoryHistory, RouteState
    from querystate.schema import array, integer, minimum, number, shape, string

    Search = shape(
        page=number(integer, minimum(1)).default(1),
        tags=array(string()).optional(),
    )

    history = MemoryHistory("/search?tags=x&tags=y")
    route = RouteState(Search, history)

    route.state                  # {"page": 1, "tags": ["x", "y"]}
    route.build_url({"page": 2}) # "/search?page=2&tags=x&tags=y"
    route.merge({"page": 2})     # pushes that URL

htmx (server side)::

    nav = HtmxNavigator(request.url)
    RouteState(Search, nav).merge({"page": 2})
    response.with_headers(dict(nav.headers))   # HX-Push-Url
"""

__version__ = "0.1.0.dev0"
__all__ = [
    "ConfigurationError",
    "ControllerConfig",
    "ConversionError",
    "HtmxNavigator",
    "MemoryHistory",
    "ParamBag",
    "QueryStateError",
    "Route",
    "RouteBuildError",
    "RouteState",
    "UnsupportedSchemaError",
    "decode",
    "decode_query",
    "encode",
    "encode_query",
    "make_route",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import querystate`` fast while providing a clean top-level API.
    """
    if name == "RouteState":
        from querystate.controller import RouteState

        return RouteState

    if name in ("Route", "make_route"):
        from querystate import routes as _routes

        return getattr(_routes, name)

    if name == "ControllerConfig":
        from querystate.config import ControllerConfig

        return ControllerConfig

    if name == "ParamBag":
        from querystate.bag import ParamBag

        return ParamBag

    if name in ("decode", "decode_query", "encode", "encode_query"):
        from querystate import codec as _codec

        return getattr(_codec, name)

    if name in ("HtmxNavigator", "MemoryHistory"):
        from querystate import navigation as _nav

        return getattr(_nav, name)

    if name in ("ConfigurationError", "ConversionError", "QueryStateError", "RouteBuildError", "UnsupportedSchemaError"):
        from querystate import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
