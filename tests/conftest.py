"""
Shared fixtures for getpro tests.
"""
import httpx
import pytest

from helpers import make_client


@pytest.fixture
def recorded_requests():
    """List receiving every request seen by ``echo_client``."""
    return []


@pytest.fixture
def echo_client(recorded_requests):
    """Client whose server echoes method, headers and body as JSON."""

    def handler(request: httpx.Request) -> httpx.Response:
        recorded_requests.append(request)
        return httpx.Response(
            200,
            json={
                "method": request.method,
                "path": request.url.path,
                "headers": dict(request.headers),
                "data": request.content.decode("utf-8", errors="replace"),
            },
        )

    return make_client(handler)


@pytest.fixture
def sample_form():
    return {"hello": "& world", "a": 1, "b": 2}


@pytest.fixture
def form_with_array():
    return {"array": True, "items": [3, 2, 1]}


@pytest.fixture
def form_with_object():
    return {"nested": True, "vars": {"item": 1}}
