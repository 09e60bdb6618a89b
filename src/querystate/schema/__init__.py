"""Schema model — describe query-string shapes, validate candidate values.

Usage::

    from querystate.schema import array, boolean, integer, minimum, number, shape, string

    Products = shape(
        q=string().default(""),
        page=number(integer, minimum(1)).default(1),
        in_stock=boolean().optional(),
        tags=array(string()).optional(),
    )

    Products.validate({"page": 2})
    # ValidationResult(data={"q": "", "page": 2}, errors={})
"""

from querystate.schema.nodes import (
    MISSING,
    Array,
    Default,
    Node,
    Object,
    Optional,
    Primitive,
    Schema,
    Union,
    array,
    boolean,
    default,
    is_absent,
    is_required,
    number,
    optional,
    shape,
    string,
    union,
    unwrap_default_or_optional,
    unwrap_optional,
    validate,
)
from querystate.schema.result import ValidationResult
from querystate.schema.rules import (
    Check,
    integer,
    matches,
    max_items,
    max_length,
    maximum,
    min_items,
    min_length,
    minimum,
    one_of,
)

__all__ = [
    "MISSING",
    "Array",
    "Check",
    "Default",
    "Node",
    "Object",
    "Optional",
    "Primitive",
    "Schema",
    "Union",
    "ValidationResult",
    "array",
    "boolean",
    "default",
    "integer",
    "is_absent",
    "is_required",
    "matches",
    "max_items",
    "max_length",
    "maximum",
    "min_items",
    "min_length",
    "minimum",
    "number",
    "one_of",
    "optional",
    "shape",
    "string",
    "union",
    "unwrap_default_or_optional",
    "unwrap_optional",
    "validate",
]
