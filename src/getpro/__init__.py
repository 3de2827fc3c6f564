"""
Awaitable HTTP client.

Follows redirects, decodes gzip bodies, and exposes responses for bulk,
push-stream and pull consumption. Form bodies (urlencoded or multipart) are
encoded lazily while they are sent.
"""
from .types import (
    FieldFilter,
    FieldPair,
    HttpMethod,
    RequestOptions,
    ResponseSnapshot,
)
from .config import (
    MAX_REDIRECTS,
    ClientConfig,
    TimeoutConfig,
)
from .errors import (
    HttpError,
    HttpInvalidProtocolError,
    HttpProtocolError,
    HttpStatusError,
    HttpTooManyRedirectsError,
    HttpUnsupportedEncodingError,
    NestedDataStructureError,
    sanitize_response,
)
from .content import (
    ContentDescriptor,
    FieldQueue,
    create_form_content,
    create_multipart_content,
)
from .core import HttpClient, Request, Response
from .factory import (
    RequestAPI,
    create_client,
    get,
    get_default_client,
    request,
    set_default_client,
)

__all__ = [
    # Types
    "FieldFilter",
    "FieldPair",
    "HttpMethod",
    "RequestOptions",
    "ResponseSnapshot",
    # Config
    "MAX_REDIRECTS",
    "ClientConfig",
    "TimeoutConfig",
    # Errors
    "HttpError",
    "HttpInvalidProtocolError",
    "HttpProtocolError",
    "HttpStatusError",
    "HttpTooManyRedirectsError",
    "HttpUnsupportedEncodingError",
    "NestedDataStructureError",
    "sanitize_response",
    # Content
    "ContentDescriptor",
    "FieldQueue",
    "create_form_content",
    "create_multipart_content",
    # Client
    "HttpClient",
    "Request",
    "Response",
    # Factory
    "RequestAPI",
    "create_client",
    "get",
    "get_default_client",
    "request",
    "set_default_client",
]

__version__ = "0.1.0"
