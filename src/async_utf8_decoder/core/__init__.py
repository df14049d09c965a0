from async_utf8_decoder.core.decoder import MIN_CAPACITY
from async_utf8_decoder.core.decoder import DecoderState
from async_utf8_decoder.core.decoder import Utf8Decoder
from async_utf8_decoder.core.reader import AsyncIterableReader
from async_utf8_decoder.core.reader import AsyncReader
from async_utf8_decoder.core.reader import ByteStreamReader
from async_utf8_decoder.core.reader import as_async_reader

__all__ = (
    "MIN_CAPACITY",
    "AsyncIterableReader",
    "AsyncReader",
    "ByteStreamReader",
    "DecoderState",
    "Utf8Decoder",
    "as_async_reader",
)
