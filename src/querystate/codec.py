"""Param codec — raw query bags to typed state and back.

Decode is schema-directed and never raises for bad user input: a value
that cannot be converted is dropped, or replaced by the field's default
when it has one. A converted value that fails its checks is always
dropped. Only a caller bug (an unsupported top-level schema) raises.

Decode pipeline::

    ParamBag ─► unwrap Optional ─► Object:  decode every field
                                   Union:   first variant whose required
                                            keys all decode wins, else {}

Encode is decode's near-inverse. Values equal to the schema default are
elided so the URL never carries what decode would rebuild anyway::

    encode(Search, {"page": 1, "tags": ["x", "y"]})
    # ParamBag({'tags': ['x', 'y']})   -- page=1 is the default
"""

from __future__ import annotations

import json
import logging
import math
import re
from collections.abc import Mapping, Sequence
from typing import Any

from querystate._internal.multimap import MultiValueMapping
from querystate.bag import ParamBag
from querystate.errors import ConversionError, UnsupportedSchemaError
from querystate.schema.nodes import (
    MISSING,
    Array,
    Default,
    Object,
    Primitive,
    Schema,
    Union,
    is_absent,
    unwrap_default_or_optional,
    unwrap_optional,
    validate,
)

logger = logging.getLogger("querystate.codec")

_NUMBER = re.compile(r"[+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)", re.ASCII)

type TypedState = dict[str, Any]
type BagLike = ParamBag | MultiValueMapping | Mapping[str, str | Sequence[str]] | str | bytes


def as_bag(bag: BagLike) -> ParamBag:
    """Coerce a query string, multimap or plain ``{key: [values]}`` dict to a ``ParamBag``."""
    if isinstance(bag, ParamBag):
        return bag
    if isinstance(bag, (str, bytes)):
        return ParamBag.from_query_string(bag)
    if isinstance(bag, MultiValueMapping):
        return ParamBag.from_multimap(bag)
    return ParamBag(bag)


# ---------------------------------------------------------------------------
# Decode
# ---------------------------------------------------------------------------


def decode(schema: Schema, bag: BagLike) -> TypedState:
    """Decode a raw param bag into typed state.

    Fields absent from the bag and without a default are omitted from
    the result, never set to ``None``.

    Raises:
        UnsupportedSchemaError: *schema* is not an ``Object`` or a
            ``Union`` of objects (optionally wrapped in ``Optional``).
    """
    params = as_bag(bag)
    target = unwrap_optional(schema)
    match target:
        case Object():
            return _decode_fields(target, params)
        case Union(variants=variants):
            for index, variant in enumerate(variants):
                try:
                    result = _decode_fields(variant, params, tentative=True)
                except ConversionError as exc:
                    logger.debug("union variant %d rejected: %s", index, exc)
                    continue
                if all(key in result for key in variant.required_keys()):
                    return result
            return {}
    msg = f"Unsupported schema type: {type(target).__name__}"
    raise UnsupportedSchemaError(msg)


def decode_query(schema: Schema, query_string: str | bytes) -> TypedState:
    """Shorthand for ``decode(schema, ParamBag.from_query_string(query_string))``."""
    return decode(schema, ParamBag.from_query_string(query_string))


def _decode_fields(obj: Object, params: ParamBag, *, tentative: bool = False) -> TypedState:
    """Decode every declared field of *obj*.

    In *tentative* mode (union variants) a conversion error on a field
    without a default propagates so the caller can reject the variant.
    """
    decoded: TypedState = {}
    for key, field_schema in obj.fields.items():
        raw = params.get_list(key)

        if not raw:
            if isinstance(field_schema, Default):
                decoded[key] = validate(field_schema).data
            continue

        try:
            value = convert(key, raw, field_schema)
        except ConversionError as exc:
            if isinstance(field_schema, Default):
                logger.debug("%s, using default", exc)
                decoded[key] = validate(field_schema).data
                continue
            if tentative:
                raise
            logger.debug("%s, field dropped", exc)
            continue

        # A converted value that fails its checks is dropped, default or not
        result = validate(field_schema, value)
        if not result:
            logger.debug("%s: %s, field dropped", key, result.errors)
        elif result.data is not MISSING:
            decoded[key] = result.data
    return decoded


# ---------------------------------------------------------------------------
# Conversion
# ---------------------------------------------------------------------------


def convert(key: str, raw: Sequence[str], field_schema: Schema) -> Any:
    """Convert raw strings to the shape under one ``Optional``/``Default`` layer.

    Raises:
        ConversionError: multiple values for a non-array field, or a
            value that cannot become the declared type.
    """
    target = unwrap_default_or_optional(field_schema)
    if len(raw) > 1 and not isinstance(target, Array):
        raise ConversionError(key, "multiple values for non-array field")

    match target:
        case Primitive(name=name):
            return convert_scalar(key, name, raw[0])
        case Array(element=Primitive(name=name)):
            return [convert_scalar(key, name, item) for item in raw]
        case Array(element=element):
            raise ConversionError(key, f"unsupported array element type {type(element).__name__}")
        case Object() | Union():
            try:
                return json.loads(raw[0])
            except json.JSONDecodeError as exc:
                raise ConversionError(key, f"invalid JSON: {exc.msg}") from exc
    raise ConversionError(key, f"unsupported type {type(target).__name__}")


def convert_scalar(key: str, name: str, text: str) -> Any:
    """Convert one raw string to a ``number``, ``boolean`` or ``string``."""
    if name == "number":
        return _parse_number(key, text)
    if name == "boolean":
        if text == "true":
            return True
        if text == "false":
            return False
        raise ConversionError(key, f"{text!r} is not a boolean")
    return text


def _parse_number(key: str, text: str) -> int | float:
    # float() also takes "inf", "1_000" and non-ASCII digits; a URL number does not
    if not _NUMBER.fullmatch(text.strip()):
        raise ConversionError(key, f"{text!r} is NaN")
    value = float(text)
    if math.isfinite(value) and value.is_integer():
        return int(value)
    return value


# ---------------------------------------------------------------------------
# Encode
# ---------------------------------------------------------------------------


def encode(
    schema: Schema,
    full_state: Mapping[str, Any],
    partial: Mapping[str, Any] | None = None,
) -> ParamBag:
    """Encode typed state into a raw param bag.

    *partial* is merged over *full_state* first. ``None`` values and
    values equal to the schema default are left out; lists become one
    entry per element; mappings become compact JSON.

    Raises:
        UnsupportedSchemaError: *schema* is not an ``Object``. Pick the
            concrete variant of a ``Union`` before encoding.
    """
    target = unwrap_optional(schema)
    if not isinstance(target, Object):
        msg = f"encode() needs an Object schema, got {type(target).__name__}"
        raise UnsupportedSchemaError(msg)

    merged = {**full_state, **partial} if partial else dict(full_state)
    defaults = _decode_fields(target, ParamBag())

    grouped: dict[str, list[str]] = {}
    for key, value in merged.items():
        if is_absent(value):
            continue
        if key in defaults and same_value(value, defaults[key]):
            continue
        if isinstance(value, (list, tuple)):
            grouped[key] = [format_value(item) for item in value if not is_absent(item)]
        else:
            grouped[key] = [format_value(value)]
    return ParamBag(grouped)


def encode_query(
    schema: Schema,
    full_state: Mapping[str, Any],
    partial: Mapping[str, Any] | None = None,
) -> str:
    """Shorthand for ``encode(...).to_query_string()``."""
    return encode(schema, full_state, partial).to_query_string()


def format_value(value: Any) -> str:
    """Render a scalar the way it appears in a URL (``true``, ``2``, ``0.5``)."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer():
            return str(int(value))
        return repr(value)
    if isinstance(value, Mapping):
        return json.dumps(value, separators=(",", ":"))
    return str(value)


def same_value(a: Any, b: Any) -> bool:
    """Equality that never confuses ``True`` with ``1``.

    Lists compare element-wise, in order.
    """
    if isinstance(a, (list, tuple)) and isinstance(b, (list, tuple)):
        return len(a) == len(b) and all(same_value(x, y) for x, y in zip(a, b, strict=True))
    if isinstance(a, bool) or isinstance(b, bool):
        return type(a) is type(b) and a == b
    return a == b
