"""querystate exception hierarchy.

Shared across the schema model, codec, and controller so every module
raises and catches the same types.
"""


class QueryStateError(Exception):
    """Base for all querystate-specific errors."""


class ConfigurationError(QueryStateError):
    """Raised when a schema definition or controller configuration is invalid.

    Typically surfaces at definition time, e.g. a ``Union`` built from
    something other than ``Object`` variants.
    """


class UnsupportedSchemaError(QueryStateError, TypeError):
    """Raised when decode/encode is handed a top-level schema it cannot handle.

    This is a caller bug, not bad input: user-supplied query strings never
    produce it.
    """


class ConversionError(QueryStateError, ValueError):
    """A raw query value could not become the declared type.

    Raised inside the codec and recovered there; ``decode()`` never lets
    it escape.
    """

    def __init__(self, key: str, reason: str) -> None:
        super().__init__(f"{key}: {reason}")
        self.key = key
        self.reason = reason


class RouteBuildError(QueryStateError, ValueError):
    """A route template was filled with params or search state that fail their schema.

    Unlike decode, building a link from application data is not user
    input, so bad values raise instead of being dropped.
    """
