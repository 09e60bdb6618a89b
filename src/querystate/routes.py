"""Route templates — typed path params plus typed search state.

A template is a file-system style path::

    /(shop)/users/[id]/files/[[...rest]]

``[id]`` fills one segment, ``[...slug]`` one or more segments,
``[[...slug]]`` zero or more (last segment only), and ``(group)``
segments are layout-only and dropped from the URL.

Usage::

    user_files = make_route(
        "/(shop)/users/[id]/files/[[...rest]]",
        name="user-files",
        params=shape(id=string(), rest=array(string()).optional()),
        search=shape(page=number(integer, minimum(1)).default(1)),
    )

    user_files({"id": "42", "rest": ["a", "b"]}, {"page": 2})
    # "/users/42/files/a/b?page=2"
    user_files({"id": "42"})
    # "/users/42/files"                  -- page=1 is the default

Unlike decode, building a link from application data is never lenient:
params or search state that fail their schema raise ``RouteBuildError``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Literal
from urllib.parse import quote

from querystate.codec import encode_query, format_value
from querystate.config import ControllerConfig
from querystate.controller import RouteState
from querystate.errors import ConfigurationError, RouteBuildError
from querystate.navigation import Location, Navigator
from querystate.scheduling import Scheduler
from querystate.schema.nodes import Object, is_absent, shape, unwrap_optional, validate

logger = logging.getLogger("querystate.routes")

type SegmentKind = Literal["static", "param", "catch_all", "optional_catch_all"]


@dataclass(frozen=True, slots=True)
class TemplateSegment:
    """A parsed segment of a route template.

    Static:             ``users``         (kind="static")
    Param:              ``[id]``          (kind="param", name="id")
    Catch-all:          ``[...slug]``     (kind="catch_all", name="slug")
    Optional catch-all: ``[[...slug]]``   (kind="optional_catch_all", name="slug")
    """

    value: str
    kind: SegmentKind = "static"
    name: str | None = None


def parse_template(template: str) -> tuple[TemplateSegment, ...]:
    """Parse a route template into segments, dropping ``(group)`` segments.

    Raises:
        ConfigurationError: An empty or repeated placeholder name, or an
            optional catch-all that is not the last segment.
    """
    parts = [part for part in template.strip("/").split("/") if part]
    segments: list[TemplateSegment] = []
    seen: set[str] = set()
    for index, part in enumerate(parts):
        if part.startswith("(") and part.endswith(")"):
            continue
        if part.startswith("[[...") and part.endswith("]]"):
            if index != len(parts) - 1:
                msg = f"Optional catch-all {part!r} must be the last segment of {template!r}"
                raise ConfigurationError(msg)
            segment = TemplateSegment(part, "optional_catch_all", part[5:-2])
        elif part.startswith("[...") and part.endswith("]"):
            segment = TemplateSegment(part, "catch_all", part[4:-1])
        elif part.startswith("[") and part.endswith("]"):
            segment = TemplateSegment(part, "param", part[1:-1])
        else:
            segments.append(TemplateSegment(part))
            continue

        if not segment.name:
            msg = f"Empty placeholder {part!r} in route template {template!r}"
            raise ConfigurationError(msg)
        if segment.name in seen:
            msg = f"Placeholder {segment.name!r} appears twice in route template {template!r}"
            raise ConfigurationError(msg)
        seen.add(segment.name)
        segments.append(segment)
    return tuple(segments)


def _object_schema(schema: Object | None, role: str) -> Object | None:
    if schema is None:
        return None
    target = unwrap_optional(schema)
    if not isinstance(target, Object):
        msg = f"Route {role} schema must be an Object, got {type(target).__name__}"
        raise ConfigurationError(msg)
    return target


def _describe(errors: Mapping[str, list[str]]) -> str:
    return "; ".join(
        f"{path or '<root>'}: {', '.join(messages)}" for path, messages in errors.items()
    )


def _quote(value: Any) -> str:
    return quote(format_value(value), safe="")


def _values(value: Any) -> list[Any]:
    if is_absent(value):
        return []
    if isinstance(value, (list, tuple)):
        return [item for item in value if not is_absent(item)]
    return [value]


@dataclass(frozen=True, slots=True)
class Route:
    """A route template with optional params and search schemas.

    Build with ``make_route()``. Calling the route is ``url()``.
    """

    template: str
    name: str = ""
    params: Object | None = None
    search: Object | None = None
    segments: tuple[TemplateSegment, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        segments = parse_template(self.template)
        params = _object_schema(self.params, "params")
        search = _object_schema(self.search, "search")
        if params is not None:
            for segment in segments:
                if segment.name is not None and segment.name not in params.fields:
                    msg = f"Route {self.label}: placeholder {segment.name!r} has no params field"
                    raise ConfigurationError(msg)
        object.__setattr__(self, "segments", segments)
        object.__setattr__(self, "params", params)
        object.__setattr__(self, "search", search)

    @property
    def label(self) -> str:
        return self.name or self.template

    def path(self, params: Mapping[str, Any] | None = None) -> str:
        """Fill the template. An empty result is ``/``.

        Raises:
            RouteBuildError: *params* fail the params schema, or a
                required placeholder has no value.
        """
        values: Mapping[str, Any] = params or {}
        if self.params is not None:
            result = validate(self.params, dict(values))
            if not result:
                msg = f"Invalid params for route {self.label}: {_describe(result.errors)}"
                raise RouteBuildError(msg)
            values = result.data

        parts: list[str] = []
        for segment in self.segments:
            match segment.kind:
                case "static":
                    parts.append(segment.value)
                case "param":
                    value = values.get(segment.name)
                    if is_absent(value):
                        msg = f"Missing param {segment.name!r} for route {self.label}"
                        raise RouteBuildError(msg)
                    parts.append(_quote(value))
                case "catch_all" | "optional_catch_all":
                    items = _values(values.get(segment.name))
                    if not items and segment.kind == "catch_all":
                        msg = f"Catch-all param {segment.name!r} for route {self.label} is empty"
                        raise RouteBuildError(msg)
                    parts.extend(_quote(item) for item in items)
        return "/" + "/".join(parts)

    def url(
        self,
        params: Mapping[str, Any] | None = None,
        search: Mapping[str, Any] | None = None,
    ) -> str:
        """``path?query``, or the bare path when the search state is all defaults.

        Raises:
            RouteBuildError: *params* or *search* fail their schema.
        """
        path = self.path(params)
        state: Mapping[str, Any] = search or {}
        if self.search is not None:
            result = validate(self.search, dict(state))
            if not result:
                msg = f"Invalid search params for route {self.label}: {_describe(result.errors)}"
                raise RouteBuildError(msg)
            state = result.data
        query = encode_query(self.search or shape(), state)
        logger.debug("built %s for route %s", path, self.label)
        return f"{path}?{query}" if query else path

    __call__ = url

    def bind(
        self,
        location: Location,
        navigator: Navigator | None = None,
        *,
        params: Mapping[str, Any] | None = None,
        config: ControllerConfig | None = None,
        scheduler: Scheduler | None = None,
    ) -> RouteState:
        """A ``RouteState`` over the search schema, based at ``path(params)``.

        Raises:
            ConfigurationError: The route has no search schema.
            RouteBuildError: *params* fail the params schema.
        """
        if self.search is None:
            msg = f"Route {self.label} has no search schema to bind"
            raise ConfigurationError(msg)
        return RouteState(
            self.search,
            location,
            navigator,
            base_path=self.path(params),
            config=config,
            scheduler=scheduler,
        )


def make_route(
    template: str,
    *,
    name: str = "",
    params: Object | None = None,
    search: Object | None = None,
) -> Route:
    """Build a ``Route``. Template errors raise ``ConfigurationError`` here, not at call time."""
    return Route(template, name, params, search)
