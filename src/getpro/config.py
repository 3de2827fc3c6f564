"""
Configuration for getpro.
"""
import logging
import os
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional, Union

import httpx

from .types import FieldFilters, HttpMethod, RequestOptions

logger = logging.getLogger("getpro.config")

MAX_REDIRECTS = 10
DEFAULT_ACCEPT_ENCODING = "gzip, deflate"
IDENTITY_ACCEPT_ENCODING = "identity"
DEFAULT_CHARSET = "utf-8"
SUPPORTED_SCHEMES = ("http", "https")


@dataclass
class TimeoutConfig:
    """Timeout configuration in seconds."""

    connect: float = 5.0
    read: float = 30.0
    write: float = 10.0


@dataclass
class ClientConfig:
    """Client configuration."""

    max_redirects: int = MAX_REDIRECTS
    timeout: Union[TimeoutConfig, float, None] = None
    headers: Dict[str, str] = field(default_factory=dict)
    verify: Optional[bool] = None
    trace: Optional[bool] = None


@dataclass
class ResolvedConfig:
    """Client configuration with every default applied."""

    max_redirects: int
    timeout: TimeoutConfig
    headers: Dict[str, str]
    verify: bool
    trace: bool


@dataclass
class ResolvedOptions:
    """Request options with every default applied."""

    method: HttpMethod
    headers: httpx.Headers
    fail_on_error: bool = True
    accept_gzip: bool = True
    filters: FieldFilters = field(default_factory=dict)
    timeout: Optional[float] = None


DEFAULT_TIMEOUT = TimeoutConfig()


def _env_flag(name: str) -> Optional[str]:
    value = os.environ.get(name)
    return value.strip() if value is not None else None


def is_ssl_verify_disabled_by_env() -> bool:
    """
    Check if SSL verification is disabled via environment variables.

    Returns True if any of these are set:
    - NODE_TLS_REJECT_UNAUTHORIZED=0
    - SSL_CERT_VERIFY=0
    """
    return _env_flag("NODE_TLS_REJECT_UNAUTHORIZED") == "0" or _env_flag("SSL_CERT_VERIFY") == "0"


def is_trace_enabled_by_env() -> bool:
    """Check if request tracing is enabled via GETPRO_TRACE."""
    return (_env_flag("GETPRO_TRACE") or "").lower() in ("1", "true", "yes", "on")


def normalize_timeout(timeout: Union[TimeoutConfig, float, None]) -> TimeoutConfig:
    """Normalize timeout config."""
    if timeout is None:
        return DEFAULT_TIMEOUT
    if isinstance(timeout, (int, float)):
        return TimeoutConfig(connect=timeout, read=timeout, write=timeout)
    return timeout


def validate_config(config: ClientConfig) -> None:
    """Validate client configuration."""
    if not isinstance(config.max_redirects, int) or isinstance(config.max_redirects, bool):
        raise ValueError(f"max_redirects must be an integer, got {config.max_redirects!r}")
    if config.max_redirects < 0:
        raise ValueError(f"max_redirects must be >= 0, got {config.max_redirects}")


def resolve_config(config: Optional[ClientConfig] = None) -> ResolvedConfig:
    """Resolve client config with defaults."""
    config = config or ClientConfig()
    validate_config(config)

    verify = config.verify
    if verify is None:
        verify = not is_ssl_verify_disabled_by_env()
        if not verify:
            logger.warning("resolve_config: TLS certificate verification disabled by environment")

    trace = config.trace if config.trace is not None else is_trace_enabled_by_env()

    return ResolvedConfig(
        max_redirects=config.max_redirects,
        timeout=normalize_timeout(config.timeout),
        headers=dict(config.headers),
        verify=verify,
        trace=trace,
    )


def build_timeout(timeout: TimeoutConfig) -> httpx.Timeout:
    """Translate a TimeoutConfig into an httpx.Timeout."""
    return httpx.Timeout(
        connect=timeout.connect,
        read=timeout.read,
        write=timeout.write,
        pool=timeout.connect,
    )


def resolve_options(
    options: Optional[RequestOptions] = None,
    method: Optional[HttpMethod] = None,
    default_headers: Optional[Mapping[str, str]] = None,
) -> ResolvedOptions:
    """
    Merge per-request options over client defaults.

    An explicit ``method`` argument wins over ``options["method"]``. Header
    names are matched case-insensitively; per-request headers override the
    client defaults.
    """
    options = dict(options or {})

    headers = httpx.Headers(default_headers or {})
    headers.update(options.get("headers") or {})

    accept_gzip = options.get("accept_gzip", True) is not False
    if "accept-encoding" not in headers:
        headers["Accept-Encoding"] = DEFAULT_ACCEPT_ENCODING if accept_gzip else IDENTITY_ACCEPT_ENCODING

    resolved_method = (method or options.get("method") or "GET").upper()

    return ResolvedOptions(
        method=resolved_method,
        headers=headers,
        fail_on_error=options.get("fail_on_error", True) is not False,
        accept_gzip=accept_gzip,
        filters=dict(options.get("filters") or {}),
        timeout=options.get("timeout"),
    )
