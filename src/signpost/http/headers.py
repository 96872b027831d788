"""Request headers as delivered by ASGI.

Raw ``(bytes, bytes)`` pairs are kept untouched; names are compared
case-insensitively and values decoded as latin-1 on access.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping


def _fold(name: str) -> bytes:
    return name.lower().encode("latin-1")


class Headers(Mapping[str, str]):
    """Immutable, case-insensitive header mapping.

    A repeated header reads as its first value; ``get_list`` returns them all.
    Iteration yields each lower-cased name once, in arrival order.
    """

    __slots__ = ("_raw",)

    def __init__(self, raw: Iterable[tuple[bytes, bytes]] = ()) -> None:
        object.__setattr__(self, "_raw", tuple(raw))

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, str]]) -> Headers:
        """Build from ``str`` pairs, e.g. ``{"Content-Type": ...}.items()``."""
        return cls((_fold(name), value.encode("latin-1")) for name, value in pairs)

    def _values(self, name: str) -> Iterator[str]:
        folded = _fold(name)
        return (value.decode("latin-1") for key, value in self._raw if key.lower() == folded)

    def __getitem__(self, key: str) -> str:
        for value in self._values(key):
            return value
        raise KeyError(key)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and next(self._values(key), None) is not None

    def __iter__(self) -> Iterator[str]:
        names = dict.fromkeys(key.decode("latin-1").lower() for key, _ in self._raw)
        return iter(names)

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def __repr__(self) -> str:
        return f"Headers({dict(self.items())!r})"

    def get(self, key: str, default: str | None = None) -> str | None:  # type: ignore[override]
        return next(self._values(key), default)

    def get_list(self, key: str) -> list[str]:
        """Every value sent for *key*, in order."""
        return list(self._values(key))

    @property
    def raw(self) -> tuple[tuple[bytes, bytes], ...]:
        """The original byte pairs, for handing back to ASGI."""
        return self._raw
