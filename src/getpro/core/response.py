"""
Response wrapper around a streamed httpx response.

The body can be read in bulk (``data``/``text``/``json``), pulled one chunk at
a time (``consume``), or pushed to a destination (``pipe``, ``async for``).
Every mode draws from the same decoded chunk iterator behind a single lock,
so modes can be mixed without losing or duplicating bytes.
"""
import asyncio
import codecs
import inspect
import json
import logging
import re
from typing import Any, AsyncIterator, Optional

import httpx

from ..config import DEFAULT_CHARSET
from ..errors import HttpUnsupportedEncodingError, sanitize_response

logger = logging.getLogger("getpro.response")

CHARSET_RE = re.compile(r"charset=([^\s;]*)")
SUPPORTED_ENCODINGS = ("identity", "gzip", "deflate")


def parse_charset(content_type: Optional[str]) -> Optional[str]:
    """Extract the charset parameter of a Content-Type header."""
    if not content_type:
        return None
    match = CHARSET_RE.search(content_type)
    if not match:
        return None
    return match.group(1).strip("\"'") or None


def parse_content_encoding(value: Optional[str]) -> str:
    encoding = (value or "identity").strip().lower()
    return encoding or "identity"


class Response:
    """An HTTP response whose body has not been read yet."""

    def __init__(self, raw: httpx.Response) -> None:
        content_encoding = parse_content_encoding(raw.headers.get("content-encoding"))
        if content_encoding not in SUPPORTED_ENCODINGS:
            raise HttpUnsupportedEncodingError(
                f"unsupported encoding {content_encoding}",
                url=str(raw.url),
                response=sanitize_response(raw),
            )

        self._raw = raw
        self._chunks: Optional[AsyncIterator[bytes]] = None
        self._lock = asyncio.Lock()
        self._done = False
        self._buffer: Optional[bytes] = None

        self.status_code = raw.status_code
        self.reason_phrase = raw.reason_phrase or ""
        self.headers = raw.headers
        self.url = str(raw.url)
        self.content_encoding = content_encoding
        self.charset = parse_charset(raw.headers.get("content-type"))
        self.encoding = self._resolve_encoding(self.charset)

    def _resolve_encoding(self, charset: Optional[str]) -> str:
        if charset is None:
            return DEFAULT_CHARSET
        try:
            return codecs.lookup(charset).name
        except LookupError:
            logger.warning(f"Response: unknown charset {charset!r} for {self.url}, using {DEFAULT_CHARSET}")
            return DEFAULT_CHARSET

    @property
    def done(self) -> bool:
        return self._done

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    async def _release(self) -> None:
        self._done = True
        await self._raw.aclose()

    async def _next_chunk(self) -> Optional[bytes]:
        """Pull one decoded chunk. Callers must hold the lock."""
        if self._done:
            return None
        if self._chunks is None:
            # httpx undoes the content-encoding validated above
            self._chunks = self._raw.aiter_bytes().__aiter__()

        try:
            while True:
                chunk = await self._chunks.__anext__()
                if chunk:
                    return chunk
        except StopAsyncIteration:
            logger.debug(f"Response: end of body for {self.url}")
            await self._release()
            return None
        except Exception:
            await self._release()
            raise

    async def consume(self) -> Optional[bytes]:
        """
        Return the next chunk of the body, or None once it is exhausted.

        Nothing is read ahead: the source is only pulled again on the next
        call.
        """
        async with self._lock:
            return await self._next_chunk()

    async def data(self) -> bytes:
        """
        Read the rest of the body into memory.

        The result is memoized; later calls return it without touching the
        stream. Chunks already delivered by ``consume`` or ``pipe`` are not
        part of the result.
        """
        async with self._lock:
            if self._done:
                return self._buffer if self._buffer is not None else b""

            chunks = []
            while True:
                chunk = await self._next_chunk()
                if chunk is None:
                    break
                chunks.append(chunk)

            self._buffer = b"".join(chunks)
            return self._buffer

    async def text(self) -> str:
        """Decode the body with the declared charset (utf-8 by default)."""
        data = await self.data()
        return data.decode(self.encoding, errors="replace")

    async def json(self) -> Any:
        return json.loads(await self.text())

    async def flush(self) -> None:
        """Discard whatever is left of the body."""
        while await self.consume() is not None:
            pass

    async def __aiter__(self) -> AsyncIterator[bytes]:
        while True:
            chunk = await self.consume()
            if chunk is None:
                return
            yield chunk

    async def pipe(self, destination: Any) -> int:
        """
        Write the remaining body into ``destination``.

        ``destination.write`` may return an awaitable; a ``drain`` method,
        when present, is called after each write. Returns the number
        of bytes written.
        """
        total = 0
        drain = getattr(destination, "drain", None)
        async for chunk in self:
            result = destination.write(chunk)
            if inspect.isawaitable(result):
                await result
            if drain is not None:
                drained = drain()
                if inspect.isawaitable(drained):
                    await drained
            total += len(chunk)
        return total

    async def aclose(self) -> None:
        """Release the connection without reading the body."""
        async with self._lock:
            if not self._done:
                await self._release()

    async def __aenter__(self) -> "Response":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    def __repr__(self) -> str:
        return f"<Response [{self.status_code}] {self.url}>"
