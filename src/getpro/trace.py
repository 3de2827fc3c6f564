"""
Pretty request/response tracing rendered with rich.

Tracing is off by default; enable it with ``ClientConfig(trace=True)`` or
``GETPRO_TRACE=1``.
"""
from typing import Dict, Mapping, Optional

from rich.console import Console
from rich.panel import Panel

SENSITIVE_HEADERS = frozenset({
    "authorization",
    "proxy-authorization",
    "x-api-key",
    "cookie",
    "set-cookie",
})


def mask_header_value(value: str, visible_chars: int = 15) -> str:
    """Keep the first characters of a secret header value."""
    if len(value) <= visible_chars:
        return "*" * len(value)
    return value[:visible_chars] + "*" * (len(value) - visible_chars)


def mask_headers(headers: Mapping[str, str]) -> Dict[str, str]:
    """Copy headers with authorization-like values masked."""
    masked = {}
    for key, value in headers.items():
        masked[key] = mask_header_value(value) if key.lower() in SENSITIVE_HEADERS else value
    return masked


class Tracer:
    """Prints one panel per request, response and redirect."""

    def __init__(self, enabled: bool = False, console: Optional[Console] = None) -> None:
        self.enabled = enabled
        self._console = console or Console(stderr=True)

    def request(self, method: str, url: str, headers: Mapping[str, str]) -> None:
        if not self.enabled:
            return
        self._console.print(Panel(f"[bold cyan]{method}[/bold cyan] {url}", title="[bold blue]Request[/bold blue]"))
        self._console.print("[bold]Headers:[/bold]", mask_headers(headers))

    def response(self, status_code: int, reason: str, url: str, headers: Mapping[str, str]) -> None:
        if not self.enabled:
            return
        color = "green" if 200 <= status_code < 300 else "yellow" if 300 <= status_code < 400 else "red"
        self._console.print(Panel(
            f"[bold {color}]{status_code}[/bold {color}] {reason}",
            title=f"[bold blue]Response[/bold blue] ({url})",
        ))
        self._console.print("[bold]Headers:[/bold]", mask_headers(headers))

    def redirect(self, location: str, remaining: int) -> None:
        if not self.enabled:
            return
        self._console.print(f"[dim]redirect -> {location} ({remaining} left)[/dim]")
