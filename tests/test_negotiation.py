"""Tests for signpost.server.negotiation — handler return values to Responses."""

import pytest

from signpost.http.response import JSON_CONTENT_TYPE, Response
from signpost.server.negotiation import negotiate


class TestNegotiate:
    def test_response_passthrough(self) -> None:
        r = Response("x", status=202)
        assert negotiate(r) is r

    def test_none_is_204(self) -> None:
        r = negotiate(None)
        assert r.status == 204
        assert r.body == ""

    def test_str_is_html(self) -> None:
        r = negotiate("Hello, Web!")
        assert r.text == "Hello, Web!"
        assert r.content_type == "text/html; charset=utf-8"

    def test_bytes_is_octet_stream(self) -> None:
        r = negotiate(b"\x00\x01")
        assert r.body == b"\x00\x01"
        assert r.content_type == "application/octet-stream"

    @pytest.mark.parametrize(
        ("value", "expected"),
        [({"hello": "JSON"}, '{"hello":"JSON"}'), ([1, 2], "[1,2]")],
    )
    def test_dict_and_list_are_json(self, value: object, expected: str) -> None:
        r = negotiate(value)
        assert r.text == expected
        assert r.content_type == JSON_CONTENT_TYPE

    def test_status_tuple(self) -> None:
        r = negotiate(("created", 201))
        assert r.status == 201
        assert r.text == "created"

    def test_status_headers_tuple(self) -> None:
        r = negotiate(({"id": 1}, 201, {"Location": "/items/1"}))
        assert r.status == 201
        assert r.header("location") == "/items/1"
        assert r.content_type == JSON_CONTENT_TYPE

    @pytest.mark.parametrize("value", [42, 1.5, object(), ("a", "b")])
    def test_unsupported_raises_type_error(self, value: object) -> None:
        with pytest.raises(TypeError, match="cannot convert"):
            negotiate(value)
