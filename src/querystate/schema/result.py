"""Validation result — immutable container for validated data or errors."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """The outcome of validating a value against a schema.

    ``success`` is True when there are no errors.
    The result is falsy when invalid, so you can write::

        result = route.validate(candidate)
        if not result:
            return Template("filters.html", errors=result.errors)

    ``data`` holds the validated value (defaults realized, unknown keys
    stripped). It is ``None`` when validation failed.

    ``errors`` maps dotted field paths to lists of error messages. The
    root value uses the empty path::

        {"page": ["Must be at least 1"],
         "tags.1": ["Expected a string"]}
    """

    data: Any = None
    errors: dict[str, list[str]] = field(default_factory=dict)

    @property
    def success(self) -> bool:
        """True if validation passed with no errors."""
        return not self.errors

    @property
    def is_valid(self) -> bool:
        return self.success

    def __bool__(self) -> bool:
        """Falsy when invalid — enables ``if not result:`` pattern."""
        return self.success
