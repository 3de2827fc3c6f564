"""
Outgoing request body that can be sent more than once.

A redirect may only be discovered after the body went out, so every fragment
handed to the transport is recorded and replayed on the next attempt.
"""
import logging
from typing import AsyncIterator, List, Optional, Union

from ..content.encoder import ContentDescriptor

logger = logging.getLogger("getpro.body")


class RequestBody:
    """Written chunks followed by an optional lazily encoded content stream."""

    def __init__(self) -> None:
        self._parts: List[bytes] = []
        self._source: Optional[ContentDescriptor] = None
        self.error: Optional[Exception] = None
        self.attempts = 0

    @property
    def is_empty(self) -> bool:
        return not self._parts and self._source is None

    @property
    def is_streaming(self) -> bool:
        """True while part of the payload is still held by a content stream."""
        return self._source is not None

    def write(self, chunk: Union[str, bytes, bytearray]) -> None:
        if self._source is not None:
            raise RuntimeError("cannot write after a content stream was attached")
        if isinstance(chunk, str):
            chunk = chunk.encode("utf-8")
        if chunk:
            self._parts.append(bytes(chunk))

    def attach(self, content: ContentDescriptor) -> None:
        if self._source is not None:
            raise RuntimeError("a content stream is already attached")
        self._source = content

    def content(self) -> Optional[Union[bytes, AsyncIterator[bytes]]]:
        """Return the payload for one attempt."""
        self.attempts += 1
        if self._source is None:
            return b"".join(self._parts) if self._parts else None
        return self._stream()

    async def _stream(self) -> AsyncIterator[bytes]:
        for part in list(self._parts):
            yield part

        while self._source is not None:
            try:
                fragment, done = await self._source.next()
            except Exception as error:
                self.error = error
                raise
            if done:
                logger.debug(f"RequestBody: content stream exhausted after {len(self._parts)} fragment(s)")
                self._source = None
                break
            self._parts.append(fragment)
            yield fragment
