"""
Factory functions and the module-level default client.
"""
from typing import Dict, Optional, Union

import httpx

from .config import ClientConfig, TimeoutConfig
from .core.client import HttpClient
from .core.request import Request
from .core.response import Response
from .types import RequestOptions

_default_client: Optional[HttpClient] = None


def create_client(
    max_redirects: Optional[int] = None,
    timeout: Union[TimeoutConfig, float, None] = None,
    headers: Optional[Dict[str, str]] = None,
    verify: Optional[bool] = None,
    trace: Optional[bool] = None,
    httpx_client: Optional[httpx.AsyncClient] = None,
) -> HttpClient:
    """
    Create an HttpClient.

    Args:
        max_redirects: Redirects followed per request (default 10).
        timeout: Timeout in seconds or a TimeoutConfig.
        headers: Default headers sent with every request.
        verify: TLS verification; None defers to the environment.
        trace: Print request/response panels; None defers to GETPRO_TRACE.
        httpx_client: Pre-built httpx.AsyncClient to send through.
    """
    config = ClientConfig(timeout=timeout, headers=dict(headers or {}), verify=verify, trace=trace)
    if max_redirects is not None:
        config.max_redirects = max_redirects
    return HttpClient(config, httpx_client=httpx_client)


def get_default_client() -> HttpClient:
    """Return the shared client, creating it on first use."""
    global _default_client
    if _default_client is None or _default_client.closed:
        _default_client = HttpClient()
    return _default_client


def set_default_client(client: Optional[HttpClient]) -> None:
    """Replace the shared client (None resets it)."""
    global _default_client
    _default_client = client


async def get(url: Union[str, httpx.URL], options: Optional[RequestOptions] = None) -> Response:
    """GET ``url`` with the shared client."""
    return await get_default_client().fetch(url, options)


class RequestAPI:
    """Verb constructors bound to the shared client."""

    def get(self, url: Union[str, httpx.URL], options: Optional[RequestOptions] = None) -> Request:
        return get_default_client().get(url, options)

    def post(self, url: Union[str, httpx.URL], options: Optional[RequestOptions] = None) -> Request:
        return get_default_client().post(url, options)

    def put(self, url: Union[str, httpx.URL], options: Optional[RequestOptions] = None) -> Request:
        return get_default_client().put(url, options)

    def patch(self, url: Union[str, httpx.URL], options: Optional[RequestOptions] = None) -> Request:
        return get_default_client().patch(url, options)

    def delete(self, url: Union[str, httpx.URL], options: Optional[RequestOptions] = None) -> Request:
        return get_default_client().delete(url, options)

    def head(self, url: Union[str, httpx.URL], options: Optional[RequestOptions] = None) -> Request:
        return get_default_client().head(url, options)


request = RequestAPI()
