"""
Awaitable HTTP request.

A Request collects headers and body, then hands itself to the dispatcher when
the body is finalized (``end`` or any of the body helpers). Awaiting the
request is the same as awaiting ``end()``.
"""
import asyncio
import json as jsonlib
import logging
from typing import Any, Generator, Mapping, Optional, Union

import httpx

from ..config import ResolvedOptions
from ..content.encoder import ContentDescriptor, create_form_content, create_multipart_content
from ..types import FieldFilters
from .body import RequestBody
from .dispatcher import RequestDispatcher, Target
from .response import Response

logger = logging.getLogger("getpro.request")

JSON_CONTENT_TYPE = "application/json"
TEXT_CONTENT_TYPE = "text/plain; charset=utf-8"


class Request:
    """A pending request. Its outcome is settled exactly once."""

    def __init__(
        self,
        url: Union[str, httpx.URL],
        options: ResolvedOptions,
        dispatcher: RequestDispatcher,
    ) -> None:
        self._options = options
        self._dispatcher = dispatcher
        self._target = Target.from_url(url, options.method, options.headers)
        self._body = RequestBody()
        self._ended = False
        self._outcome: Optional["asyncio.Future[Response]"] = None

    @property
    def url(self) -> str:
        return str(self._target.url)

    @property
    def method(self) -> str:
        return self._target.method

    @property
    def headers(self) -> httpx.Headers:
        return self._target.headers

    @property
    def ended(self) -> bool:
        return self._ended

    def _check_open(self) -> None:
        if self._ended:
            raise RuntimeError("request body already ended")

    def has_header(self, name: str) -> bool:
        return name in self._target.headers

    def set_header(self, name: str, value: str) -> "Request":
        """Set a single header value."""
        self._check_open()
        self._target.headers[name] = str(value)
        return self

    def _default_content_type(self, value: str) -> None:
        self._check_open()
        if not self.has_header("content-type"):
            self._target.headers["Content-Type"] = value

    def write(self, chunk: Union[str, bytes]) -> "Request":
        """Append raw data to the request payload."""
        self._check_open()
        self._body.write(chunk)
        return self

    async def end(self, chunk: Optional[Union[str, bytes]] = None) -> Response:
        """Finalize the body and wait for the response."""
        if chunk is not None:
            self.write(chunk)

        if self._outcome is None:
            self._ended = True
            logger.debug(f"Request.end: dispatching {self.method} {self.url}")
            self._outcome = asyncio.ensure_future(
                self._dispatcher.issue(self._target, self._options, self._body)
            )
        return await asyncio.shield(self._outcome)

    def __await__(self) -> Generator[Any, None, Response]:
        return self.end().__await__()

    async def json(self, value: Any) -> Response:
        """Send ``value`` JSON-encoded."""
        self._default_content_type(JSON_CONTENT_TYPE)
        return await self.end(jsonlib.dumps(value).encode("utf-8"))

    async def text(self, value: str) -> Response:
        """Send a string as-is."""
        self._default_content_type(TEXT_CONTENT_TYPE)
        return await self.end(value)

    async def data(self, content: Union[Mapping[str, Any], str, bytes]) -> Response:
        """
        Send ``content`` as the payload.

        Mappings are form-encoded (``application/x-www-form-urlencoded``);
        strings and bytes are sent as-is without touching Content-Type.
        """
        if isinstance(content, (str, bytes, bytearray)):
            return await self.end(bytes(content) if isinstance(content, bytearray) else content)
        return await self.stream_content(create_form_content(content, self._filters()))

    async def form(self, content: Mapping[str, Any]) -> Response:
        """Send ``content`` as ``multipart/form-data`` (RFC 2388)."""
        return await self.stream_content(create_multipart_content(content, self._filters()))

    async def stream_content(self, content: ContentDescriptor) -> Response:
        """Send a lazily encoded body, setting Content-Type unless present."""
        self._check_open()
        self._default_content_type(content.mimetype)
        self._body.attach(content)
        return await self.end()

    def _filters(self) -> Optional[FieldFilters]:
        return self._options.filters or None

    def __repr__(self) -> str:
        return f"<Request {self.method} {self.url}>"
