"""
Type definitions for getpro.
"""
from dataclasses import dataclass, field
from typing import (
    Any,
    Awaitable,
    Callable,
    Dict,
    Literal,
    Mapping,
    Optional,
    TYPE_CHECKING,
    TypedDict,
    Union,
)

if TYPE_CHECKING:
    from .content.encoder import FieldQueue


# HTTP methods
HttpMethod = Literal["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD"]

# Content encodings a response body may be decoded from
ContentEncoding = Literal["identity", "gzip", "deflate"]

# Runtime kinds used to select a field filter while encoding forms
ValueKind = Literal[
    "array",
    "object",
    "boolean",
    "number",
    "string",
    "bytes",
    "null",
    "other",
]


@dataclass
class FieldPair:
    """A pending form field."""

    key: str
    value: Any


# A filter receives the pending pair and the live queue. It returns the pair
# to encode, or None to suppress it. Coroutine functions are accepted.
FieldFilter = Callable[
    [FieldPair, "FieldQueue"],
    Union[Optional[FieldPair], Awaitable[Optional[FieldPair]]],
]

FieldFilters = Mapping[str, FieldFilter]


@dataclass(frozen=True)
class ResponseSnapshot:
    """Serializable view of a response attached to errors."""

    status_code: int
    reason_phrase: str = ""
    http_version: str = ""
    headers: Dict[str, str] = field(default_factory=dict)
    method: Optional[str] = None
    url: Optional[str] = None
    path: Optional[str] = None


class RequestOptions(TypedDict, total=False):
    """Per-request options."""

    method: HttpMethod
    headers: Dict[str, str]
    fail_on_error: bool
    accept_gzip: bool
    filters: FieldFilters
    timeout: float
