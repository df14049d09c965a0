from __future__ import annotations

import logging
from collections.abc import AsyncIterable
from inspect import iscoroutinefunction
from typing import TYPE_CHECKING
from typing import Protocol
from typing import runtime_checkable

from anyio import EndOfStream
from anyio.abc import ByteReceiveStream

from async_utf8_decoder._internal._utils import copy_into

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

__all__ = (
    "AsyncIterableReader",
    "AsyncReader",
    "ByteStreamReader",
    "as_async_reader",
)

_LOG = logging.getLogger(__name__)


@runtime_checkable
class AsyncReader(Protocol):
    """A source of bytes that can be read into a caller-provided buffer."""

    async def readinto(self, buffer: memoryview, /) -> int:
        """Write up to ``len(buffer)`` bytes into the buffer and return how many were written.

        Returning zero means the source is permanently exhausted. Implementations
        await until at least one byte is available or the source closes, and
        report transport failures by raising.
        """
        ...


class ByteStreamReader:
    """Read from an anyio byte stream - sockets, TLS streams, process pipes, etc."""

    def __init__(self, stream: ByteReceiveStream) -> None:
        self.stream = stream
        self._surplus = b""

    async def readinto(self, buffer: memoryview, /) -> int:
        """Receive at most ``len(buffer)`` bytes - end of stream is reported as zero."""
        data = self._surplus
        while not data:
            try:
                data = await self.stream.receive(len(buffer))
            except EndOfStream:
                return 0
        count, self._surplus = copy_into(buffer, data)
        return count

    async def aclose(self) -> None:
        """Close the underlying stream."""
        await self.stream.aclose()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.stream!r})"


class AsyncIterableReader:
    """Read from any asynchronous iterable of bytes.

    Items larger than the space a read offers are split across reads. Empty
    items are skipped rather than taken as the end of the iterable.
    """

    def __init__(self, iterable: AsyncIterable[bytes]) -> None:
        self.iterable = iterable
        self._iterator: AsyncIterator[bytes] | None = None
        self._surplus = b""

    async def readinto(self, buffer: memoryview, /) -> int:
        """Copy the next available bytes into the buffer - exhaustion is reported as zero."""
        if self._iterator is None:
            self._iterator = aiter(self.iterable)
        data = self._surplus
        while not data:
            try:
                data = await anext(self._iterator)
            except StopAsyncIteration:
                return 0
        count, self._surplus = copy_into(buffer, data)
        return count

    async def aclose(self) -> None:
        """Close the iterable if it supports closing."""
        if (aclose := getattr(self.iterable, "aclose", None)) is not None:
            await aclose()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.iterable!r})"


def as_async_reader(obj: AsyncReader | ByteReceiveStream | AsyncIterable[bytes]) -> AsyncReader:
    """Get a reader for the given byte source."""
    if isinstance(obj, ByteReceiveStream):
        return ByteStreamReader(obj)
    if isinstance(obj, AsyncReader) and iscoroutinefunction(obj.readinto):
        return obj
    if isinstance(obj, AsyncIterable):
        _LOG.debug("reading from async iterable %r", obj)
        return AsyncIterableReader(obj)
    msg = f"Expected an async reader, byte stream, or async iterable of bytes - got {obj!r}"
    raise TypeError(msg)
