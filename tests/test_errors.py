"""
Tests for errors.py
Logic testing: Path coverage
"""
import json

import httpx
import pytest

from getpro.errors import (
    HttpError,
    HttpInvalidProtocolError,
    HttpProtocolError,
    HttpStatusError,
    HttpTooManyRedirectsError,
    HttpUnsupportedEncodingError,
    NestedDataStructureError,
    sanitize_response,
)
from getpro.types import ResponseSnapshot


class TestHierarchy:
    """Tests for the error taxonomy."""

    @pytest.mark.parametrize("cls,parent", [
        (HttpInvalidProtocolError, HttpError),
        (HttpProtocolError, HttpError),
        (HttpStatusError, HttpError),
        (HttpTooManyRedirectsError, HttpProtocolError),
        (HttpUnsupportedEncodingError, HttpProtocolError),
    ])
    def test_parents(self, cls, parent):
        assert issubclass(cls, parent)

    def test_kind(self):
        assert HttpTooManyRedirectsError("x").kind == "HttpTooManyRedirectsError"

    def test_nested_message(self):
        error = NestedDataStructureError()

        assert isinstance(error, ValueError)
        assert str(error) == "Nested data structure are not supported in forms"


class TestSanitizeResponse:
    """Tests for sanitize_response."""

    # Happy Path: allow-listed fields only
    def test_snapshot(self):
        request = httpx.Request("POST", "https://api.example.com/items?page=2")
        response = httpx.Response(404, headers={"X-Id": "1"}, request=request)

        snapshot = sanitize_response(response)

        assert snapshot == ResponseSnapshot(
            status_code=404,
            reason_phrase="Not Found",
            http_version="HTTP/1.1",
            headers={"x-id": "1"},
            method="POST",
            url="https://api.example.com/items?page=2",
            path="/items?page=2",
        )

    # Boundary: response without request
    def test_without_request(self):
        snapshot = sanitize_response(httpx.Response(500))

        assert snapshot.status_code == 500
        assert snapshot.method is None
        assert snapshot.path is None

    # Path: error payload is plain, serializable data
    def test_to_dict(self):
        request = httpx.Request("GET", "https://api.example.com/x")
        snapshot = sanitize_response(httpx.Response(500, request=request))
        error = HttpStatusError("Bad status: 500", url="https://api.example.com/x", response=snapshot)

        payload = error.to_dict()

        assert json.loads(json.dumps(payload)) == payload
        assert payload["kind"] == "HttpStatusError"
        assert payload["message"] == "Bad status: 500"
        assert payload["response"]["status_code"] == 500
        assert error.status_code == 500

    # Boundary: no snapshot attached
    def test_to_dict_without_response(self):
        error = HttpInvalidProtocolError("Unsupported protocol ftp:", url="ftp://x")

        assert error.to_dict() == {
            "message": "Unsupported protocol ftp:",
            "kind": "HttpInvalidProtocolError",
            "url": "ftp://x",
            "response": None,
        }
        assert HttpStatusError("x").status_code is None
