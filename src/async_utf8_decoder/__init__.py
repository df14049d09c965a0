"""Asynchronous and incremental UTF-8 decoding.

Turn any asynchronous source of bytes into a stream of validated text chunks:

```python
from anyio import create_memory_object_stream

from async_utf8_decoder import AsyncIterableReader
from async_utf8_decoder import Utf8Decoder

send, receive = create_memory_object_stream[bytes](4)
decoder = Utf8Decoder.new(AsyncIterableReader(receive))

await send.send(b"\\xf0\\x9f")
await send.send(b"\\x92\\x96")
assert await decoder.next() == "\\U0001f496"
```
"""

from async_utf8_decoder.common.exceptions import DecodeError
from async_utf8_decoder.common.exceptions import IncompleteSequenceError
from async_utf8_decoder.common.exceptions import MalformedSequenceError
from async_utf8_decoder.common.streaming import decode_async_byte_stream
from async_utf8_decoder.common.streaming import read_text
from async_utf8_decoder.core.decoder import MIN_CAPACITY
from async_utf8_decoder.core.decoder import DecoderState
from async_utf8_decoder.core.decoder import Utf8Decoder
from async_utf8_decoder.core.reader import AsyncIterableReader
from async_utf8_decoder.core.reader import AsyncReader
from async_utf8_decoder.core.reader import ByteStreamReader
from async_utf8_decoder.core.reader import as_async_reader

__version__ = "0.1.0"

__all__ = (
    "MIN_CAPACITY",
    "AsyncIterableReader",
    "AsyncReader",
    "ByteStreamReader",
    "DecodeError",
    "DecoderState",
    "IncompleteSequenceError",
    "MalformedSequenceError",
    "Utf8Decoder",
    "as_async_reader",
    "decode_async_byte_stream",
    "read_text",
)
