from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING
from typing import Generic
from typing import TypeVar

from anyio import ResourceGuard

from async_utf8_decoder._internal._logging import PrefixLogger
from async_utf8_decoder._internal.settings import ASYNC_UTF8_DECODER_CAPACITY
from async_utf8_decoder.common.exceptions import IncompleteSequenceError
from async_utf8_decoder.common.exceptions import MalformedSequenceError

if TYPE_CHECKING:
    from types import TracebackType

    from typing_extensions import Self

    from async_utf8_decoder.core.reader import AsyncReader

__all__ = (
    "MIN_CAPACITY",
    "DecoderState",
    "Utf8Decoder",
)

_LOG = logging.getLogger(__name__)

R = TypeVar("R", bound="AsyncReader")

MIN_CAPACITY = 4
"""The length of the longest UTF-8 encoded character."""

_UNEXPECTED_END = "unexpected end of data"


class DecoderState(Enum):
    """The state of a decoder between pulls."""

    IDLE = "idle"
    """No bytes are carried over from the previous read."""
    PARTIAL = "partial"
    """The front of the buffer holds the start of an incomplete character."""
    CLOSED = "closed"
    """The source ended cleanly or the decoder was closed - no more chunks."""
    ERRORED = "errored"
    """Decoding failed - every later pull raises the same error."""


class Utf8Decoder(Generic[R]):
    """Incrementally decode UTF-8 text from an asynchronous byte source.

    The decoder reads into a fixed buffer, emits the longest valid prefix of
    what it has read as a chunk, and carries any incomplete trailing character
    over to the next read. Chunks are never empty and decoding is never lossy.

    Iterate over the decoder with ``async for`` or call :meth:`next` directly.
    Only one task may pull from a decoder at a time.

    Args:
        source: The reader to decode from. The decoder owns it from now on.
        capacity: The size of the read buffer in bytes - at least 4. When not
            given, ``ASYNC_UTF8_DECODER_CAPACITY`` or 8192 is used.
    """

    def __init__(self, source: R, capacity: int | None = None) -> None:
        if capacity is None:
            capacity = ASYNC_UTF8_DECODER_CAPACITY()
        if capacity < MIN_CAPACITY:
            msg = f"Decoder capacity must be at least {MIN_CAPACITY} bytes - got {capacity}"
            raise ValueError(msg)
        self._source = source
        self._buffer = bytearray(capacity)
        self._view = memoryview(self._buffer)
        self._pending = 0
        self._offset = 0
        self._state = DecoderState.IDLE
        self._error: BaseException | None = None
        self._source_closed = False
        self._guard = ResourceGuard("decoding from")
        self._log = PrefixLogger(_LOG, self)

    @classmethod
    def new(cls, source: R) -> Utf8Decoder[R]:
        """Create a decoder with the default capacity."""
        return cls(source)

    @classmethod
    def with_capacity(cls, capacity: int, source: R) -> Utf8Decoder[R]:
        """Create a decoder whose buffer holds ``capacity`` bytes."""
        return cls(source, capacity)

    @property
    def capacity(self) -> int:
        """The size of the read buffer in bytes."""
        return len(self._buffer)

    @property
    def pending(self) -> int:
        """The number of bytes of an incomplete character carried over to the next read."""
        return self._pending

    @property
    def offset(self) -> int:
        """The number of bytes from the source that have been emitted as text."""
        return self._offset

    @property
    def state(self) -> DecoderState:
        """The current state of the decoder."""
        return self._state

    @property
    def source(self) -> R:
        """The source this decoder reads from."""
        return self._source

    def get_ref(self) -> R:
        """Get the source this decoder reads from."""
        return self._source

    def get_mut(self) -> R:
        """Get the source this decoder reads from, for callers that intend to reconfigure it.

        Reading from the source directly while the decoder is in use corrupts its output.
        """
        return self._source

    def into_inner(self) -> R:
        """Give up the source - the decoder will neither read from it nor close it again."""
        self._close()
        self._source_closed = True
        return self._source

    async def next(self) -> str | None:
        """Get the next chunk of decoded text - returns None once the source is exhausted.

        Raises:
            MalformedSequenceError: The source produced bytes that are not valid UTF-8.
            IncompleteSequenceError: The source ended in the middle of a character.
            anyio.BusyResourceError: Another task is already pulling from this decoder.

        Any error raised by the source is propagated unchanged. After an error,
        every call raises the same exception again without touching the source.
        """
        with self._guard:
            if self._error is not None:
                # drop the previous traceback so repeated pulls do not grow it
                raise self._error.with_traceback(None)
            while self._state is not DecoderState.CLOSED:
                try:
                    count = await self._source.readinto(self._view[self._pending :])
                except Exception as error:
                    self._fail(error)
                    raise
                if (chunk := self._decode(count)) is not None:
                    return chunk
            return None

    async def aclose(self) -> None:
        """Close the decoder and its source if the source can be closed."""
        self._close()
        if self._source_closed:
            return
        self._source_closed = True
        if (aclose := getattr(self._source, "aclose", None)) is not None:
            await aclose()

    def __aiter__(self) -> Self:
        return self

    async def __anext__(self) -> str:
        if (chunk := await self.next()) is None:
            raise StopAsyncIteration
        return chunk

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        await self.aclose()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._source!r}, state={self._state.value})"

    def _decode(self, count: int) -> str | None:
        if not count:
            if self._pending:
                remains = bytes(self._view[: self._pending])
                raise self._fail(IncompleteSequenceError(remains, self._offset))
            self._log.debug("source exhausted after %d bytes", self._offset)
            self._close()
            return None

        end = self._pending + count
        try:
            text = str(self._view[:end], "utf-8")
        except UnicodeDecodeError as error:
            if error.reason != _UNEXPECTED_END or error.end != end:
                malformed = MalformedSequenceError.from_unicode_error(error, self._offset)
                raise self._fail(malformed) from error
            valid_up_to = error.start
        else:
            self._offset += end
            self._pending = 0
            self._state = DecoderState.IDLE
            return text

        text = str(self._view[:valid_up_to], "utf-8")
        self._pending = end - valid_up_to
        # memoryview assignment is a memmove so the regions may overlap
        self._view[: self._pending] = self._view[valid_up_to:end]
        self._offset += valid_up_to
        self._state = DecoderState.PARTIAL
        self._log.debug("carrying %d bytes of an incomplete character", self._pending)
        return text or None

    def _fail(self, error: BaseException) -> BaseException:
        self._log.debug("decoding failed - %s", error)
        self._error = error
        self._state = DecoderState.ERRORED
        return error

    def _close(self) -> None:
        if self._state is not DecoderState.ERRORED:
            self._state = DecoderState.CLOSED
