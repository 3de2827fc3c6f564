"""
Error types raised by getpro.

Every failed request surfaces exactly one of these (or an untouched
transport error from httpx).
"""
from dataclasses import asdict
from typing import Any, Dict, Optional

import httpx

from .types import ResponseSnapshot


class HttpError(Exception):
    """Base class for request failures detected by getpro."""

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        response: Optional[ResponseSnapshot] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.url = url
        self.response = response

    @property
    def kind(self) -> str:
        return type(self).__name__

    def to_dict(self) -> Dict[str, Any]:
        """Return the error payload as plain data."""
        return {
            "message": self.message,
            "kind": self.kind,
            "url": self.url,
            "response": asdict(self.response) if self.response else None,
        }


class HttpInvalidProtocolError(HttpError):
    """The URL scheme is not http or https. No network call was made."""


class HttpProtocolError(HttpError):
    """The server answered with a malformed response."""


class HttpStatusError(HttpError):
    """The response status is outside the accepted range."""

    @property
    def status_code(self) -> Optional[int]:
        return self.response.status_code if self.response else None


class HttpTooManyRedirectsError(HttpProtocolError):
    """The redirect budget was exhausted."""


class HttpUnsupportedEncodingError(HttpProtocolError):
    """The response declares a content-encoding we cannot decode."""


class NestedDataStructureError(ValueError):
    """Raised when a form field holds a nested structure without a filter."""

    def __init__(self, message: str = "Nested data structure are not supported in forms") -> None:
        super().__init__(message)
        self.message = message


def sanitize_response(response: httpx.Response) -> ResponseSnapshot:
    """Project a live response onto the fields safe to attach to an error."""
    method = url = path = None
    try:
        request = response.request
    except RuntimeError:
        request = None
    if request is not None:
        method = request.method
        url = str(request.url)
        path = request.url.raw_path.decode("ascii", errors="replace")

    return ResponseSnapshot(
        status_code=response.status_code,
        reason_phrase=response.reason_phrase or "",
        http_version=response.http_version,
        headers=dict(response.headers),
        method=method,
        url=url,
        path=path,
    )
