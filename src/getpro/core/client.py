"""
HTTP client built on httpx.AsyncClient.
"""
import logging
from typing import Optional, Union

import httpx

from ..config import ClientConfig, build_timeout, resolve_config, resolve_options
from ..trace import Tracer
from ..types import HttpMethod, RequestOptions
from .dispatcher import RequestDispatcher
from .request import Request
from .response import Response

logger = logging.getLogger("getpro.client")


class HttpClient:
    """
    Verb-specific entry points over a shared httpx.AsyncClient.

    Example:
        async with HttpClient() as client:
            response = await client.get("https://example.com/items")
            items = await response.json()

            response = await client.post("https://example.com/items").form({"name": "x"})
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        httpx_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._config = resolve_config(config)
        if httpx_client is not None:
            self._client = httpx_client
        else:
            self._client = httpx.AsyncClient(
                timeout=build_timeout(self._config.timeout),
                verify=self._config.verify,
                follow_redirects=False,
            )
        self._dispatcher = RequestDispatcher(
            self._client,
            max_redirects=self._config.max_redirects,
            tracer=Tracer(enabled=self._config.trace),
        )
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def request(
        self,
        method: HttpMethod,
        url: Union[str, httpx.URL],
        options: Optional[RequestOptions] = None,
    ) -> Request:
        """Create a request; await it (or one of its body helpers) to send it."""
        if self._closed:
            raise RuntimeError("Client has been closed")
        resolved = resolve_options(options, method=method, default_headers=self._config.headers)
        logger.debug(f"HttpClient.request: method={resolved.method}, url={url}")
        return Request(url, resolved, self._dispatcher)

    def get(self, url: Union[str, httpx.URL], options: Optional[RequestOptions] = None) -> Request:
        """GET request."""
        return self.request("GET", url, options)

    def post(self, url: Union[str, httpx.URL], options: Optional[RequestOptions] = None) -> Request:
        """POST request."""
        return self.request("POST", url, options)

    def put(self, url: Union[str, httpx.URL], options: Optional[RequestOptions] = None) -> Request:
        """PUT request."""
        return self.request("PUT", url, options)

    def patch(self, url: Union[str, httpx.URL], options: Optional[RequestOptions] = None) -> Request:
        """PATCH request."""
        return self.request("PATCH", url, options)

    def delete(self, url: Union[str, httpx.URL], options: Optional[RequestOptions] = None) -> Request:
        """DELETE request."""
        return self.request("DELETE", url, options)

    def head(self, url: Union[str, httpx.URL], options: Optional[RequestOptions] = None) -> Request:
        """HEAD request."""
        return self.request("HEAD", url, options)

    async def fetch(self, url: Union[str, httpx.URL], options: Optional[RequestOptions] = None) -> Response:
        """Send a GET request with an empty body and return its response."""
        return await self.get(url, options).end()

    async def close(self) -> None:
        """Close the client."""
        self._closed = True
        await self._client.aclose()

    async def __aenter__(self) -> "HttpClient":
        """Enter async context manager."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit async context manager."""
        await self.close()
