"""Schema nodes — the tagged union the codec dispatches on.

Nodes are frozen dataclasses, built once at route-definition time and
never mutated. Every node carries a ``kind`` discriminant; code that needs
to branch on the shape uses ``match`` class patterns.

Building a schema::

    from querystate.schema import array, integer, minimum, number, shape, string

    Search = shape(
        q=string().default(""),
        page=number(integer, minimum(1)).default(1),
        tags=array(string()).optional(),
    )

Validation is structural: type conformance plus whatever checks the
nodes carry. ``None`` and ``MISSING`` both mean "absent".
"""

from __future__ import annotations

import copy
import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, ClassVar, Literal

from querystate.errors import ConfigurationError
from querystate.schema.result import ValidationResult
from querystate.schema.rules import Check

type PrimitiveKind = Literal["number", "boolean", "string"]
type Schema = Object | Optional | Default | Union | Array | Primitive


class _Missing:
    """Sentinel for "no value at all", distinct from ``None``."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


def is_absent(value: Any) -> bool:
    """True for ``MISSING`` and ``None``."""
    return value is MISSING or value is None


class Node:
    """Shared fluent helpers. Holds no state of its own."""

    __slots__ = ()

    kind: ClassVar[str]

    def optional(self) -> Optional:
        return Optional(self)  # type: ignore[arg-type]

    def default(self, value: Any) -> Default:
        return Default(self, value)  # type: ignore[arg-type]

    def validate(self, value: Any = MISSING) -> ValidationResult:
        return validate(self, value)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# Nodes
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Primitive(Node):
    """A scalar: ``number``, ``boolean`` or ``string``."""

    name: PrimitiveKind
    checks: tuple[Check, ...] = ()

    kind: ClassVar[str] = "primitive"

    def __post_init__(self) -> None:
        if self.name not in ("number", "boolean", "string"):
            msg = f"Unknown primitive kind: {self.name!r}"
            raise ConfigurationError(msg)


@dataclass(frozen=True, slots=True)
class Array(Node):
    """A homogeneous list of primitives (``?tag=a&tag=b``)."""

    element: Schema
    checks: tuple[Check, ...] = ()

    kind: ClassVar[str] = "array"

    def __post_init__(self) -> None:
        if not isinstance(self.element, Primitive):
            msg = (
                f"Unsupported array element type {type(self.element).__name__}: "
                "arrays hold number, boolean or string elements only"
            )
            raise ConfigurationError(msg)


@dataclass(frozen=True, slots=True)
class Optional(Node):
    """The inner schema, or nothing at all."""

    inner: Schema

    kind: ClassVar[str] = "optional"


@dataclass(frozen=True, slots=True)
class Default(Node):
    """The inner schema, with *value* standing in when absent."""

    inner: Schema
    value: Any

    kind: ClassVar[str] = "default"

    def realize(self) -> Any:
        """Return a private copy of the default value."""
        return copy.deepcopy(self.value)


@dataclass(frozen=True, slots=True)
class Object(Node):
    """A record of named fields — the shape of a whole query string."""

    fields: dict[str, Schema] = field(default_factory=dict)

    kind: ClassVar[str] = "object"

    def keys(self) -> list[str]:
        return list(self.fields)

    def required_keys(self) -> list[str]:
        """Fields that are neither ``Optional`` nor ``Default``."""
        return [key for key, schema in self.fields.items() if is_required(schema)]

    def extend(self, fields: Mapping[str, Schema] | None = None, /, **more: Schema) -> Object:
        """Return a new ``Object`` with *fields* added or replaced."""
        merged = dict(self.fields)
        merged.update(fields or {})
        merged.update(more)
        return Object(merged)

    def partial(self) -> Object:
        """Return a copy where every field may be absent.

        ``Default`` fields lose their default: a partial value must not
        grow keys the caller never supplied.
        """
        relaxed: dict[str, Schema] = {}
        for key, schema in self.fields.items():
            match schema:
                case Optional():
                    relaxed[key] = schema
                case Default(inner=inner):
                    relaxed[key] = Optional(inner)
                case _:
                    relaxed[key] = Optional(schema)
        return Object(relaxed)


@dataclass(frozen=True, slots=True)
class Union(Node):
    """Alternative record shapes, tried in declaration order."""

    variants: tuple[Object, ...]

    kind: ClassVar[str] = "union"

    def __post_init__(self) -> None:
        if not self.variants:
            msg = "Union needs at least one variant"
            raise ConfigurationError(msg)
        for variant in self.variants:
            if not isinstance(variant, Object):
                msg = f"Union variants must be Object schemas, got {type(variant).__name__}"
                raise ConfigurationError(msg)


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------


def number(*checks: Check) -> Primitive:
    return Primitive("number", checks)


def boolean(*checks: Check) -> Primitive:
    return Primitive("boolean", checks)


def string(*checks: Check) -> Primitive:
    return Primitive("string", checks)


def array(element: Schema, *checks: Check) -> Array:
    return Array(element, checks)


def shape(fields: Mapping[str, Schema] | None = None, /, **more: Schema) -> Object:
    """Build an ``Object``. Pass a mapping for keys that are not identifiers."""
    merged = dict(fields or {})
    merged.update(more)
    return Object(merged)


def union(*variants: Object) -> Union:
    return Union(tuple(variants))


def optional(inner: Schema) -> Optional:
    return Optional(inner)


def default(inner: Schema, value: Any) -> Default:
    return Default(inner, value)


# ---------------------------------------------------------------------------
# Introspection
# ---------------------------------------------------------------------------


def unwrap_optional(schema: Schema) -> Schema:
    """Strip exactly one outer ``Optional``."""
    if isinstance(schema, Optional):
        return schema.inner
    return schema


def unwrap_default_or_optional(schema: Schema) -> Schema:
    """Strip exactly one outer ``Default`` or ``Optional``."""
    if isinstance(schema, (Optional, Default)):
        return schema.inner
    return schema


def is_required(schema: Schema) -> bool:
    return not isinstance(schema, (Optional, Default))


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


def validate(schema: Schema, value: Any = MISSING) -> ValidationResult:
    """Validate *value* against *schema*.

    ``validate(schema)`` with no value realizes defaults: for an
    ``Object`` it returns every ``Default`` field's value and omits the
    ``Optional`` ones.
    """
    errors: dict[str, list[str]] = {}
    data = _check(schema, value, "", errors)
    if errors:
        return ValidationResult(errors=errors)
    return ValidationResult(data=data)


def _check(schema: Schema, value: Any, path: str, errors: dict[str, list[str]]) -> Any:
    match schema:
        case Optional(inner=inner):
            if is_absent(value):
                return MISSING
            return _check(inner, value, path, errors)
        case Default(inner=inner):
            if is_absent(value):
                return schema.realize()
            return _check(inner, value, path, errors)
        case _ if is_absent(value):
            _add(errors, path, "This field is required")
            return MISSING
        case Primitive(name=name, checks=checks):
            if not _is_kind(name, value):
                _add(errors, path, f"Expected a {name}")
                return MISSING
            return _run_checks(checks, value, path, errors)
        case Array(element=element, checks=checks):
            if not isinstance(value, (list, tuple)):
                _add(errors, path, "Expected an array")
                return MISSING
            before = len(errors)
            items = [_check(element, item, _join(path, i), errors) for i, item in enumerate(value)]
            if len(errors) > before:
                return MISSING
            return _run_checks(checks, items, path, errors)
        case Object(fields=fields):
            if not isinstance(value, Mapping):
                _add(errors, path, "Expected an object")
                return MISSING
            out: dict[str, Any] = {}
            for key, field_schema in fields.items():
                result = _check(field_schema, value.get(key, MISSING), _join(path, key), errors)
                if result is not MISSING:
                    out[key] = result
            return out
        case Union(variants=variants):
            for variant in variants:
                result = validate(variant, value)
                if result:
                    return result.data
            _add(errors, path, "Does not match any variant")
            return MISSING
    msg = f"Not a schema node: {schema!r}"
    raise ConfigurationError(msg)


def _is_kind(kind_name: str, value: Any) -> bool:
    if kind_name == "number":
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return False
        return not (isinstance(value, float) and math.isnan(value))
    if kind_name == "boolean":
        return isinstance(value, bool)
    return isinstance(value, str)


def _run_checks(checks: tuple[Check, ...], value: Any, path: str, errors: dict[str, list[str]]) -> Any:
    for check in checks:
        message = check(value)
        if message is not None:
            _add(errors, path, message)
            return MISSING
    return value


def _add(errors: dict[str, list[str]], path: str, message: str) -> None:
    errors.setdefault(path, []).append(message)


def _join(path: str, key: str | int) -> str:
    return f"{path}.{key}" if path else str(key)
