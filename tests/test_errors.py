"""Tests for signpost.errors and the server error pipeline."""

import logging

import pytest

from signpost.errors import (
    ConfigurationError,
    HTTPError,
    MalformedBodyError,
    NotFoundError,
    PayloadTooLarge,
    SignpostError,
)
from signpost.http.request import Request
from signpost.server.errors import handle_http_error, handle_internal_error


def _request(path: str = "/x") -> Request:
    return Request.build("GET", path)


class TestHierarchy:
    @pytest.mark.parametrize(
        "cls", [ConfigurationError, HTTPError, NotFoundError, MalformedBodyError, PayloadTooLarge]
    )
    def test_all_are_signpost_errors(self, cls: type) -> None:
        assert issubclass(cls, SignpostError)

    def test_status_codes(self) -> None:
        assert NotFoundError().status == 404
        assert MalformedBodyError().status == 400
        assert PayloadTooLarge(10).status == 413

    def test_default_details(self) -> None:
        assert NotFoundError().detail == "Not Found"
        assert MalformedBodyError().detail == "Malformed JSON body"
        assert PayloadTooLarge(10).detail == "Request body exceeds 10 bytes"

    def test_str(self) -> None:
        assert str(HTTPError(418, "teapot")) == "418: teapot"
        assert str(HTTPError(500)) == "500"

    def test_raisable(self) -> None:
        with pytest.raises(HTTPError) as exc_info:
            raise NotFoundError("gone")
        assert exc_info.value.detail == "gone"


class TestHandleHTTPError:
    def test_default_plain_text(self) -> None:
        r = handle_http_error(NotFoundError(), _request(), {})
        assert r.status == 404
        assert r.text == "Not Found"
        assert r.content_type == "text/plain; charset=utf-8"

    def test_empty_detail(self) -> None:
        assert handle_http_error(HTTPError(409), _request(), {}).text == "Error 409"

    def test_debug_prefixes_status(self) -> None:
        r = handle_http_error(HTTPError(409, "conflict"), _request(), {}, debug=True)
        assert r.text == "409: conflict"

    def test_exception_headers_copied(self) -> None:
        exc = HTTPError(401, "login", headers=(("WWW-Authenticate", "Basic"),))
        r = handle_http_error(exc, _request(), {})
        assert r.header("www-authenticate") == "Basic"

    def test_handler_by_status(self) -> None:
        r = handle_http_error(NotFoundError(), _request("/a"), {404: lambda req: req.path})
        assert r.status == 404
        assert r.text == "/a"

    def test_handler_by_type_beats_status(self) -> None:
        handlers = {404: lambda: "by status", NotFoundError: lambda: "by type"}
        assert handle_http_error(NotFoundError(), _request(), handlers).text == "by type"

    def test_handler_by_base_type(self) -> None:
        handlers = {HTTPError: lambda req, exc: f"{exc.status}"}
        r = handle_http_error(MalformedBodyError(), _request(), handlers)
        assert r.text == "400"
        assert r.status == 400

    def test_handler_status_override(self) -> None:
        r = handle_http_error(NotFoundError(), _request(), {404: lambda: ("moved", 410)})
        assert r.status == 410

    def test_failing_handler_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        def broken() -> str:
            raise RuntimeError("nope")

        with caplog.at_level(logging.ERROR, logger="signpost.server"):
            r = handle_http_error(NotFoundError(), _request(), {404: broken})
        assert r.text == "Not Found"
        assert "Error handler for 404 raised" in caplog.text


class TestHandleInternalError:
    def test_generic_500(self) -> None:
        r = handle_internal_error(RuntimeError("secret"), _request(), {})
        assert r.status == 500
        assert r.text == "Internal Server Error"

    def test_debug_shows_exception(self) -> None:
        r = handle_internal_error(RuntimeError("secret"), _request(), {}, debug=True)
        assert "RuntimeError: secret" in r.text

    def test_500_handler(self) -> None:
        r = handle_internal_error(RuntimeError("x"), _request(), {500: lambda: "oops"})
        assert r.status == 500
        assert r.text == "oops"

    def test_logged_with_traceback(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.ERROR, logger="signpost.server"):
            try:
                raise ValueError("boom")
            except ValueError as exc:
                handle_internal_error(exc, _request("/p"), {})
        record = caplog.records[-1]
        assert record.getMessage() == "500 GET /p"
        assert record.exc_info is not None
