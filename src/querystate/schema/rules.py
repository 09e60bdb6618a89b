"""Built-in checks for schema nodes.

Each check is a callable with the signature::

    def rule(value: Any) -> str | None:
        '''Return error message, or None if valid.'''

Checks run after the node's type check, so a check attached to a
``number()`` only ever sees numbers. Parameterized checks are factory
functions that return a check::

    def maximum(n: float) -> Check:
        def check(value: Any) -> str | None:
            if value > n:
                return f"Must be at most {n}"
            return None
        return check

Custom checks follow the same protocol — any callable matching
``(Any) -> str | None`` can be passed to a builder.
"""

import re
from collections.abc import Callable
from typing import Any

# Type alias for a check function
type Check = Callable[[Any], str | None]


# ---------------------------------------------------------------------------
# Numbers
# ---------------------------------------------------------------------------


def integer(value: Any) -> str | None:
    """Number must have no fractional part."""
    if isinstance(value, float) and not value.is_integer():
        return "Must be a whole number"
    return None


def minimum(n: float) -> Check:
    """Number must be at least *n*."""

    def check(value: Any) -> str | None:
        if value < n:
            return f"Must be at least {n}"
        return None

    return check


def maximum(n: float) -> Check:
    """Number must be at most *n*."""

    def check(value: Any) -> str | None:
        if value > n:
            return f"Must be at most {n}"
        return None

    return check


# ---------------------------------------------------------------------------
# Strings
# ---------------------------------------------------------------------------


def max_length(n: int) -> Check:
    """String must be at most *n* characters."""

    def check(value: Any) -> str | None:
        if len(value) > n:
            return f"Must be at most {n} characters"
        return None

    return check


def min_length(n: int) -> Check:
    """String must be at least *n* characters."""

    def check(value: Any) -> str | None:
        if len(value) < n:
            return f"Must be at least {n} characters"
        return None

    return check


def matches(pattern: str, message: str | None = None) -> Check:
    """String must match the given regex pattern."""
    compiled = re.compile(pattern)

    def check(value: Any) -> str | None:
        if not compiled.match(value):
            return message or f"Must match pattern: {pattern}"
        return None

    return check


def one_of(*choices: str) -> Check:
    """Value must be one of the given choices."""
    allowed = frozenset(choices)

    def check(value: Any) -> str | None:
        if value not in allowed:
            options = ", ".join(sorted(allowed))
            return f"Must be one of: {options}"
        return None

    return check


# ---------------------------------------------------------------------------
# Arrays
# ---------------------------------------------------------------------------


def min_items(n: int) -> Check:
    """Array must hold at least *n* items."""

    def check(value: Any) -> str | None:
        if len(value) < n:
            return f"Must have at least {n} items"
        return None

    return check


def max_items(n: int) -> Check:
    """Array must hold at most *n* items."""

    def check(value: Any) -> str | None:
        if len(value) > n:
            return f"Must have at most {n} items"
        return None

    return check
