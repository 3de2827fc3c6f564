"""
Request dispatcher: sends a request and follows its redirect chain.

Each attempt either resolves to a Response, raises, or produces a new Target
from the ``Location`` header and loops. httpx' own redirect handling is never
used so the budget and the body replay stay under our control.
"""
import logging
from dataclasses import dataclass
from typing import Optional, Union

import httpx

from ..config import MAX_REDIRECTS, SUPPORTED_SCHEMES, ResolvedOptions
from ..errors import (
    HttpInvalidProtocolError,
    HttpProtocolError,
    HttpStatusError,
    HttpTooManyRedirectsError,
    sanitize_response,
)
from ..trace import Tracer, mask_headers
from .body import RequestBody
from .response import Response

logger = logging.getLogger("getpro.dispatcher")


@dataclass
class Target:
    """Where the next attempt goes."""

    url: httpx.URL
    method: str
    headers: httpx.Headers

    @classmethod
    def from_url(
        cls,
        url: Union[str, httpx.URL],
        method: str = "GET",
        headers: Optional[httpx.Headers] = None,
    ) -> "Target":
        return cls(url=httpx.URL(url), method=method, headers=httpx.Headers(headers or {}))

    def redirect(self, location: str) -> "Target":
        """Resolve ``location`` against this target, keeping method and headers."""
        return Target(url=self.url.join(location), method=self.method, headers=self.headers.copy())


class RedirectBudget:
    """Remaining number of redirects a request may follow."""

    def __init__(self, limit: int = MAX_REDIRECTS) -> None:
        self.remaining = limit

    def take(self) -> bool:
        if self.remaining <= 0:
            return False
        self.remaining -= 1
        return True


def is_success(status_code: int) -> bool:
    return 200 <= status_code < 300


def is_redirect(status_code: int) -> bool:
    return 300 <= status_code < 400


class RequestDispatcher:
    """Issues requests through an httpx.AsyncClient."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        max_redirects: int = MAX_REDIRECTS,
        tracer: Optional[Tracer] = None,
    ) -> None:
        self._client = client
        self._max_redirects = max_redirects
        self._tracer = tracer or Tracer()

    async def issue(
        self,
        target: Target,
        options: ResolvedOptions,
        body: Optional[RequestBody] = None,
    ) -> Response:
        """
        Send ``target`` and follow redirects until a final answer.

        Raises:
            HttpInvalidProtocolError: the scheme is neither http nor https.
            HttpProtocolError: a redirect came without a Location header.
            HttpTooManyRedirectsError: the redirect budget ran out.
            HttpStatusError: the final status is outside 2xx and
                ``fail_on_error`` is set.
            HttpUnsupportedEncodingError: the body uses an unknown encoding.
        """
        budget = RedirectBudget(self._max_redirects)

        while True:
            raw = await self._send(target, options, body)
            status = raw.status_code

            if not options.fail_on_error or is_success(status):
                return await self._resolve(raw)

            snapshot = sanitize_response(raw)
            await raw.aclose()

            if is_redirect(status):
                location = raw.headers.get("location")
                if not location:
                    logger.debug(f"RequestDispatcher.issue: {status} without location from {target.url}")
                    raise HttpProtocolError("http redirect without a location", url=str(target.url), response=snapshot)
                if not budget.take():
                    logger.debug(f"RequestDispatcher.issue: redirect budget exhausted at {target.url}")
                    raise HttpTooManyRedirectsError("Maximum redirects exceeded", url=str(target.url), response=snapshot)

                target = target.redirect(location)
                logger.debug(f"RequestDispatcher.issue: {status} redirect to {target.url}, {budget.remaining} left")
                self._tracer.redirect(str(target.url), budget.remaining)
                continue

            logger.debug(f"RequestDispatcher.issue: rejecting status {status} from {target.url}")
            raise HttpStatusError(f"Bad status: {status}", url=str(target.url), response=snapshot)

    async def _send(
        self,
        target: Target,
        options: ResolvedOptions,
        body: Optional[RequestBody],
    ) -> httpx.Response:
        if target.url.scheme not in SUPPORTED_SCHEMES:
            raise HttpInvalidProtocolError(f"Unsupported protocol {target.url.scheme}:", url=str(target.url))

        request = self._client.build_request(
            method=target.method,
            url=target.url,
            headers=target.headers,
            content=body.content() if body is not None else None,
            timeout=options.timeout if options.timeout is not None else httpx.USE_CLIENT_DEFAULT,
        )
        logger.debug(f"RequestDispatcher._send: {target.method} {target.url}")
        logger.debug(f"RequestDispatcher._send: headers={mask_headers(request.headers)}")
        self._tracer.request(target.method, str(target.url), request.headers)

        try:
            raw = await self._client.send(request, stream=True, follow_redirects=False)
        except Exception:
            if body is not None and body.error is not None:
                # payload encoding failed mid-upload
                raise body.error
            raise

        self._tracer.response(raw.status_code, raw.reason_phrase or "", str(target.url), raw.headers)
        return raw

    async def _resolve(self, raw: httpx.Response) -> Response:
        try:
            return Response(raw)
        except Exception:
            await raw.aclose()
            raise
