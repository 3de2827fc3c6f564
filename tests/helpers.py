"""
Test helpers shared by the getpro test modules.
"""
import gzip
from typing import AsyncIterator, Callable, Iterable, List

import httpx

from getpro.config import ClientConfig
from getpro.core.client import HttpClient


async def async_chunks(chunks: Iterable[bytes]) -> AsyncIterator[bytes]:
    """Yield chunks from an async generator so httpx streams them one by one."""
    for chunk in chunks:
        yield chunk


def streamed_response(
    chunks: List[bytes],
    status_code: int = 200,
    headers=None,
    url: str = "https://api.example.com/stream",
) -> httpx.Response:
    """Build an unread httpx.Response whose body arrives in ``chunks``."""
    return httpx.Response(
        status_code,
        headers=headers or {},
        content=async_chunks(chunks),
        request=httpx.Request("GET", url),
    )


def gzip_chunks(payload: bytes, size: int = 7) -> List[bytes]:
    """Compress ``payload`` and split it into small pieces."""
    compressed = gzip.compress(payload)
    return [compressed[i:i + size] for i in range(0, len(compressed), size)]


def redirect_chain_handler(final_json=None) -> Callable[[httpx.Request], httpx.Response]:
    """Serve ``/redirect/<n>`` as n hops ending on ``/get``."""

    def handler(request: httpx.Request) -> httpx.Response:
        path = request.url.path
        if path.startswith("/redirect/"):
            remaining = int(path.rsplit("/", 1)[1])
            location = "/get" if remaining <= 1 else f"/redirect/{remaining - 1}"
            return httpx.Response(302, headers={"location": location})
        if path == "/get":
            return httpx.Response(200, json=final_json or {"url": str(request.url)})
        return httpx.Response(404)

    return handler


def make_client(handler, **config) -> HttpClient:
    """HttpClient sending through an httpx.MockTransport."""
    transport = httpx.MockTransport(handler)
    return HttpClient(
        ClientConfig(**config),
        httpx_client=httpx.AsyncClient(transport=transport),
    )


