"""Tests for signpost.http.headers — immutable, case-insensitive Headers."""

import pytest

from signpost.http.headers import Headers


def _h(*pairs: tuple[str, str]) -> Headers:
    """Shorthand: build Headers from string pairs."""
    return Headers.from_pairs(pairs)


class TestHeaders:
    def test_case_insensitive(self) -> None:
        h = _h(("Content-Type", "text/html"))
        assert h["content-type"] == "text/html"
        assert h["CONTENT-TYPE"] == "text/html"

    def test_missing_key_raises(self) -> None:
        with pytest.raises(KeyError):
            _h(("Accept", "*/*"))["X-Missing"]

    def test_contains(self) -> None:
        h = _h(("Accept", "*/*"))
        assert "accept" in h
        assert "x-missing" not in h
        assert 42 not in h  # type: ignore[operator]

    def test_first_value_and_get_list(self) -> None:
        h = _h(("Accept", "text/html"), ("accept", "text/xml"))
        assert h["Accept"] == "text/html"
        assert h.get_list("ACCEPT") == ["text/html", "text/xml"]

    def test_iter_and_len_deduplicate(self) -> None:
        h = _h(("Accept", "*/*"), ("Content-Type", "text/html"), ("Accept", "text/xml"))
        assert list(h) == ["accept", "content-type"]
        assert len(h) == 2

    def test_get_default(self) -> None:
        h = _h()
        assert h.get("accept") is None
        assert h.get("accept", "*/*") == "*/*"

    def test_raw_round_trip(self) -> None:
        raw = ((b"x-one", b"1"), (b"x-two", b"2"))
        assert Headers(raw).raw == raw

    def test_immutable(self) -> None:
        h = _h(("A", "1"))
        with pytest.raises(AttributeError):
            h.foo = "bar"  # type: ignore[attr-defined]
