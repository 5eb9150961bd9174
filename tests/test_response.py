"""Tests for wayfare.http.response — chainable Response and Redirect."""

import pytest

from wayfare.http.response import Redirect, Response


class TestResponse:
    def test_defaults(self) -> None:
        response = Response()
        assert response.body == ""
        assert response.status == 200
        assert response.content_type == "text/html; charset=utf-8"
        assert response.headers == ()

    def test_with_status_returns_new(self) -> None:
        original = Response("x")
        changed = original.with_status(404)
        assert changed.status == 404
        assert original.status == 200

    def test_with_header_appends(self) -> None:
        response = Response().with_header("X-A", "1").with_header("X-A", "2")
        assert response.headers == (("X-A", "1"), ("X-A", "2"))

    def test_with_headers(self) -> None:
        response = Response().with_headers({"X-A": "1", "X-B": "2"})
        assert response.headers == (("X-A", "1"), ("X-B", "2"))

    def test_with_content_type(self) -> None:
        assert Response().with_content_type("text/plain").content_type == "text/plain"

    def test_header_lookup_case_insensitive(self) -> None:
        response = Response().with_header("Location", "/x")
        assert response.header("location") == "/x"
        assert response.header("missing") is None

    def test_body_conversions(self) -> None:
        assert Response("héllo").body_bytes == "héllo".encode()
        assert Response(b"bytes").text == "bytes"

    def test_frozen(self) -> None:
        with pytest.raises(AttributeError):
            Response().status = 500  # type: ignore[misc]


class TestRedirect:
    def test_defaults(self) -> None:
        redirect = Redirect("/login")
        assert redirect.status == 302
        assert redirect.headers == ()
