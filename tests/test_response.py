"""Tests for waypoint.http.response — immutable gateway responses."""

import json

import pytest

from waypoint.http.response import Response


class TestResponse:
    def test_defaults(self) -> None:
        resp = Response()
        assert resp.status == 200
        assert resp.content_type == "text/plain; charset=utf-8"
        assert resp.headers == ()

    def test_with_header_returns_new_instance(self) -> None:
        original = Response("x")
        changed = original.with_header("A", "1").with_header("B", "2")
        assert original.headers == ()
        assert changed.headers == (("A", "1"), ("B", "2"))

    def test_header_lookup_case_insensitive(self) -> None:
        resp = Response().with_header("X-Waypoint-Error", "no-route")
        assert resp.header("x-waypoint-error") == "no-route"
        assert resp.header("missing") is None
        assert resp.header("missing", "dflt") == "dflt"

    def test_json(self) -> None:
        resp = Response.json({"error": "no_route"}, status=404)
        assert resp.status == 404
        assert resp.content_type == "application/json"
        assert json.loads(resp.text) == {"error": "no_route"}

    def test_body_conversions(self) -> None:
        assert Response("héllo").body_bytes == "héllo".encode()
        assert Response(b"bytes").text == "bytes"

    def test_frozen(self) -> None:
        with pytest.raises(AttributeError):
            Response().status = 500  # type: ignore[misc]
