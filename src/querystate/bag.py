"""Immutable multi-valued query parameters.

Implements ``Mapping[str, str]`` and the ``MultiValueMapping`` protocol.
Keys keep the order of their first appearance; values keep occurrence
order. No key ever maps to an empty list.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, Sequence
from urllib.parse import parse_qsl, urlencode

from querystate._internal.multimap import MultiValueMapping

type RawValue = str | Sequence[str] | None


class ParamBag(Mapping[str, str]):
    """Immutable raw query parameters.

    Attributes:
        _data: Field name -> list of raw string values.

    ``__getitem__`` returns the first value for a key.
    ``get_list`` returns all values for a key.
    """

    _data: dict[str, list[str]]

    __slots__ = ("_data",)

    def __init__(self, data: Mapping[str, str | Sequence[str]] | None = None) -> None:
        cleaned: dict[str, list[str]] = {}
        for key, values in (data or {}).items():
            # a bare str is one value, not a sequence of one-character values
            items = [values] if isinstance(values, str) else list(values)
            if items:
                cleaned[key] = items
        object.__setattr__(self, "_data", cleaned)

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, str]]) -> ParamBag:
        """Group ``(key, value)`` occurrences into a bag."""
        grouped: dict[str, list[str]] = {}
        for key, value in pairs:
            grouped.setdefault(key, []).append(value)
        return cls(grouped)

    @classmethod
    def from_query_string(cls, query_string: str | bytes) -> ParamBag:
        """Parse ``a=1&tag=x&tag=y`` (a leading ``?`` is ignored)."""
        if isinstance(query_string, bytes):
            query_string = query_string.decode("latin-1")
        query_string = query_string.removeprefix("?")
        return cls.from_pairs(parse_qsl(query_string, keep_blank_values=True))

    @classmethod
    def from_multimap(cls, params: MultiValueMapping) -> ParamBag:
        """Copy any ``MultiValueMapping`` (a framework's query params object)."""
        return cls({key: params.get_list(key) for key in params})

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, RawValue]) -> ParamBag:
        """Build a bag from a framework-style ``{key: str | [str] | None}`` dict.

        ``None`` and empty lists are dropped.
        """
        grouped: dict[str, list[str]] = {}
        for key, value in mapping.items():
            if value is None:
                continue
            if isinstance(value, str):
                grouped[key] = [value]
            else:
                grouped[key] = [str(v) for v in value]
        return cls(grouped)

    def __getitem__(self, key: str) -> str:
        return self._data[key][0]

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ParamBag):
            return self._data == other._data
        if isinstance(other, Mapping):
            return self._data == dict(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"ParamBag({self._data!r})"

    def get(self, key: str, default: str | None = None) -> str | None:  # type: ignore[override]
        """Return the first value for *key*, or *default* if missing."""
        values = self._data.get(key)
        if values:
            return values[0]
        return default

    def get_list(self, key: str) -> list[str]:
        """Return all values for *key*."""
        return list(self._data.get(key, []))

    def pairs(self) -> list[tuple[str, str]]:
        """Flatten back to ``(key, value)`` pairs, grouped by key."""
        return [(key, value) for key, values in self._data.items() for value in values]

    def to_dict(self) -> dict[str, list[str]]:
        return {key: list(values) for key, values in self._data.items()}

    def to_query_string(self) -> str:
        """Form-urlencode the bag (spaces become ``+``). No leading ``?``."""
        return urlencode(self.pairs())
