"""Immutable query string parameters.

Implements ``Mapping[str, str]`` with last-value-wins lookup and
``get_list`` for every value of a repeated key.
"""

from collections.abc import Iterator, Mapping
from urllib.parse import parse_qsl, urlencode


def _decode(query_string: str | bytes) -> str:
    if isinstance(query_string, bytes):
        return query_string.decode("latin-1")
    return query_string


class QueryParams(Mapping[str, str]):
    """Immutable query string parameters.

    Attributes:
        _data: Parsed query string as field name -> list of values,
            in the order the fields first appeared.
        _raw: Raw query string.

    ``__getitem__`` returns the last value for a key, so ``?name=a&name=b``
    reads as ``"b"``. ``get_list`` returns all values for a key.
    """

    _data: dict[str, list[str]]
    _raw: str

    __slots__ = ("_data", "_raw")

    def __init__(self, query_string: str | bytes = b"") -> None:
        raw = _decode(query_string).lstrip("?")
        data: dict[str, list[str]] = {}
        for key, value in parse_qsl(raw, keep_blank_values=True):
            data.setdefault(key, []).append(value)
        object.__setattr__(self, "_raw", raw)
        object.__setattr__(self, "_data", data)

    def __setattr__(self, name: str, value: object) -> None:
        msg = "QueryParams is immutable"
        raise AttributeError(msg)

    def __getitem__(self, key: str) -> str:
        return self._data[key][-1]

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {self[k]!r}" for k in self)
        return f"QueryParams({{{items}}})"

    @property
    def raw(self) -> str:
        """The query string as received, without the leading ``?``."""
        return self._raw

    def get(self, key: str, default: str | None = None) -> str | None:  # type: ignore[override]
        """Return the last value for *key*, or *default* if missing."""
        values = self._data.get(key)
        if values:
            return values[-1]
        return default

    def get_list(self, key: str) -> list[str]:
        """Return all values for *key*."""
        return list(self._data.get(key, []))

    def get_int(self, key: str, default: int | None = None) -> int | None:
        """Return value as int, or *default* if missing or not numeric."""
        value = self.get(key)
        if value is None:
            return default
        try:
            return int(value)
        except ValueError:
            return default

    def get_bool(self, key: str, default: bool | None = None) -> bool | None:
        """Return value as bool (``true``/``1``/``yes``/``on`` -> True)."""
        value = self.get(key)
        if value is None:
            return default
        return value.lower() in ("true", "1", "yes", "on")


def encode_query(params: Mapping[str, str]) -> str:
    """Encode a mapping as a query string that ``QueryParams`` reads back."""
    return urlencode(list(params.items()))
