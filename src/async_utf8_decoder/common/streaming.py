from __future__ import annotations

from typing import TYPE_CHECKING

from async_utf8_decoder.core.decoder import Utf8Decoder
from async_utf8_decoder.core.reader import as_async_reader

if TYPE_CHECKING:
    from collections.abc import AsyncIterable
    from collections.abc import AsyncIterator

    from anyio.abc import ByteReceiveStream

    from async_utf8_decoder.core.reader import AsyncReader

__all__ = ("decode_async_byte_stream", "read_text")


async def decode_async_byte_stream(
    stream: AsyncReader | ByteReceiveStream | AsyncIterable[bytes],
    *,
    capacity: int | None = None,
) -> AsyncIterator[str]:
    """Convert a stream of bytes to a stream of non-empty UTF-8 strings.

    The stream is closed once decoding finishes, fails, or the generator is closed.
    """
    async with Utf8Decoder(as_async_reader(stream), capacity) as decoder:
        async for chunk in decoder:
            yield chunk


async def read_text(
    stream: AsyncReader | ByteReceiveStream | AsyncIterable[bytes],
    *,
    capacity: int | None = None,
) -> str:
    """Decode a whole stream of bytes into a single string."""
    return "".join([chunk async for chunk in decode_async_byte_stream(stream, capacity=capacity)])
