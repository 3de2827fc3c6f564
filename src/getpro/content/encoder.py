"""
Lazy encoders for form request bodies.

Both encoders walk a FieldQueue seeded from the object's items, run each
pending pair through its field filter, and render the result only when the
next fragment is pulled. Encoding errors therefore surface while the body is
being sent, not when the descriptor is created.
"""
import inspect
import logging
import secrets
from collections import deque
from dataclasses import dataclass
from typing import Any, AsyncIterator, Iterable, Mapping, Optional, Tuple
from urllib.parse import quote, quote_plus

from ..types import FieldFilters, FieldPair
from .filters import select_filter, value_kind

logger = logging.getLogger("getpro.content")

FORM_MIMETYPE = "application/x-www-form-urlencoded"
MULTIPART_MIMETYPE = "multipart/form-data"
BOUNDARY_PREFIX = "--------"
BOUNDARY_RANDOM_BYTES = 10

# Marks left unescaped in URI components besides alphanumerics
_URI_COMPONENT_SAFE = "-_.!~*'()"

Fragment = Tuple[Optional[bytes], bool]


def _as_text(value: Any) -> Any:
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    return str(value)


def encode_uri_component(value: Any) -> str:
    """Percent-encode a key or value as a URI component."""
    return quote(_as_text(value), safe=_URI_COMPONENT_SAFE)


def encode_form_component(value: Any) -> str:
    """Percent-encode a form value, rendering spaces as ``+``."""
    return quote_plus(_as_text(value), safe=_URI_COMPONENT_SAFE)


def _to_bytes(value: Any) -> bytes:
    value = _as_text(value)
    return value if isinstance(value, bytes) else value.encode("utf-8")


class FieldQueue:
    """
    Ordered work-list of pending (key, value) pairs.

    Filters receive the live queue and may push further pairs onto it, so
    encoding runs until the queue reaches a fixed point.
    """

    def __init__(self, pairs: Iterable[FieldPair] = ()) -> None:
        self._pairs = deque(pairs)

    @classmethod
    def from_object(cls, obj: Mapping[str, Any]) -> "FieldQueue":
        if not isinstance(obj, Mapping):
            raise TypeError(f"form content requires a mapping, got {type(obj).__name__}")
        return cls(FieldPair(key=key, value=value) for key, value in obj.items())

    def push(self, pair: FieldPair) -> None:
        """Append a pair after every pending one."""
        self._pairs.append(pair)

    def push_front(self, pairs: Iterable[FieldPair]) -> None:
        """Insert pairs ahead of the pending ones, keeping their order."""
        for pair in reversed(list(pairs)):
            self._pairs.appendleft(pair)

    def pop(self) -> FieldPair:
        return self._pairs.popleft()

    def __len__(self) -> int:
        return len(self._pairs)

    def __bool__(self) -> bool:
        return bool(self._pairs)


@dataclass
class EncoderState:
    """Mutable state threaded through each encode step."""

    separator: bytes = b""
    boundary: Optional[str] = None
    terminated: bool = False
    exhausted: bool = False
    fields: int = 0


class ContentDescriptor:
    """
    A MIME type plus a lazily produced sequence of encoded fragments.

    ``next()`` returns ``(fragment, done)`` pairs; once ``done`` is reported
    every later call reports it again.
    """

    def __init__(
        self,
        mimetype: str,
        queue: FieldQueue,
        filters: Optional[FieldFilters] = None,
        state: Optional[EncoderState] = None,
    ) -> None:
        self._mimetype = mimetype
        self._queue = queue
        self._filters = dict(filters or {})
        self._state = state or EncoderState()
        self._iterated = False

    @property
    def mimetype(self) -> str:
        return self._mimetype

    @property
    def state(self) -> EncoderState:
        return self._state

    def encode_field(self, pair: FieldPair, state: EncoderState) -> bytes:
        raise NotImplementedError

    def terminus(self, state: EncoderState) -> Optional[bytes]:
        """Closing fragment emitted once after the last field, if any."""
        return None

    async def _filter(self, pair: FieldPair) -> Optional[FieldPair]:
        field_filter = select_filter(value_kind(pair.value), self._filters)
        result = field_filter(pair, self._queue)
        if inspect.isawaitable(result):
            result = await result
        return result

    async def next(self) -> Fragment:
        """Produce the next encoded fragment."""
        state = self._state
        if state.exhausted:
            return None, True

        while self._queue:
            encoded = await self._filter(self._queue.pop())
            if encoded is None:
                continue
            state.fields += 1
            return self.encode_field(encoded, state), False

        if not state.terminated:
            state.terminated = True
            closing = self.terminus(state)
            if closing is not None:
                return closing, False

        state.exhausted = True
        logger.debug(f"{type(self).__name__}: encoded {state.fields} field(s)")
        return None, True

    async def __aiter__(self) -> AsyncIterator[bytes]:
        if self._iterated:
            raise RuntimeError("content has already been consumed")
        self._iterated = True
        while True:
            fragment, done = await self.next()
            if done:
                return
            yield fragment

    async def read(self) -> bytes:
        """Encode the remaining content into a single buffer."""
        return b"".join([fragment async for fragment in self])


class FormContent(ContentDescriptor):
    """``application/x-www-form-urlencoded`` body."""

    def encode_field(self, pair: FieldPair, state: EncoderState) -> bytes:
        encoded = (
            state.separator
            + encode_uri_component(pair.key).encode("ascii")
            + b"="
            + encode_form_component(pair.value).encode("ascii")
        )
        state.separator = b"&"
        return encoded


class MultipartContent(ContentDescriptor):
    """``multipart/form-data`` body (RFC 2388)."""

    @property
    def boundary(self) -> str:
        return self.state.boundary

    def encode_field(self, pair: FieldPair, state: EncoderState) -> bytes:
        head = (
            f"--{state.boundary}\r\n"
            f"Content-Disposition: form-data; name=\"{pair.key}\"\r\n"
            "\r\n"
        )
        return head.encode("utf-8") + _to_bytes(pair.value) + b"\r\n"

    def terminus(self, state: EncoderState) -> Optional[bytes]:
        return f"--{state.boundary}--\r\n".encode("ascii")


def generate_boundary() -> str:
    return BOUNDARY_PREFIX + secrets.token_hex(BOUNDARY_RANDOM_BYTES)


def create_form_content(
    obj: Mapping[str, Any],
    filters: Optional[FieldFilters] = None,
) -> FormContent:
    """
    Encode ``obj`` as ``application/x-www-form-urlencoded``.

    Example:
        content = create_form_content({"hello": "& world", "a": 1})
        await content.read()  # b"hello=%26+world&a=1"
    """
    return FormContent(FORM_MIMETYPE, FieldQueue.from_object(obj), filters)


def create_multipart_content(
    obj: Mapping[str, Any],
    filters: Optional[FieldFilters] = None,
) -> MultipartContent:
    """Encode ``obj`` as ``multipart/form-data`` with a fresh boundary."""
    boundary = generate_boundary()
    return MultipartContent(
        f"{MULTIPART_MIMETYPE}; boundary={boundary}",
        FieldQueue.from_object(obj),
        filters,
        EncoderState(boundary=boundary),
    )
