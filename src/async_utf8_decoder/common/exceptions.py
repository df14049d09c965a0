from __future__ import annotations

__all__ = (
    "DecodeError",
    "IncompleteSequenceError",
    "MalformedSequenceError",
)


class DecodeError(Exception):
    """Base class for errors discovered while decoding a UTF-8 byte stream.

    Failures of the underlying transport are not wrapped in this class. They
    are raised exactly as the reader raised them.
    """


class MalformedSequenceError(DecodeError, ValueError):
    """Raised when the stream contains a byte sequence that can never be valid UTF-8.

    Args:
        data: The bytes that were being validated when the error was found.
        valid_up_to: The index in ``data`` up to which the bytes were valid.
        error_len: The length of the invalid sequence starting at ``valid_up_to``.
        position: The offset of the invalid sequence from the start of the stream.
        reason: A short description of what is wrong with the sequence.
    """

    def __init__(
        self,
        data: bytes,
        valid_up_to: int,
        error_len: int,
        position: int,
        reason: str,
    ) -> None:
        self.data = data
        self.valid_up_to = valid_up_to
        self.error_len = error_len
        self.position = position
        self.reason = reason
        bad = data[valid_up_to : valid_up_to + error_len]
        msg = f"invalid utf-8 sequence {bad!r} at position {position}: {reason}"
        super().__init__(msg)

    @classmethod
    def from_unicode_error(cls, error: UnicodeDecodeError, offset: int) -> MalformedSequenceError:
        """Create an error from the one raised by the codec, relative to a stream offset."""
        return cls(
            data=bytes(error.object),
            valid_up_to=error.start,
            error_len=error.end - error.start,
            position=offset + error.start,
            reason=error.reason,
        )

    @property
    def valid_text(self) -> str:
        """The text decoded before the invalid sequence - it was never emitted as a chunk."""
        return self.data[: self.valid_up_to].decode("utf-8")


class IncompleteSequenceError(DecodeError, ValueError):
    """Raised when the stream ends in the middle of a multi-byte character.

    Args:
        remains: The lead and continuation bytes left over when the stream closed.
        position: The offset of the first leftover byte from the start of the stream.
    """

    def __init__(self, remains: bytes, position: int) -> None:
        self.remains = remains
        self.position = position
        msg = f"incomplete utf-8 sequence {remains!r} at position {position}"
        super().__init__(msg)
