# midi/errors.py
from typing import Optional


class MidiDecodeError(ValueError):
    """Base class for everything that can go wrong while decoding an SMF."""
    def __init__(self, message: str, offset: Optional[int] = None):
        self.offset = offset
        if offset is not None:
            message = f"{message} (at byte {offset})"
        super().__init__(message)


class TruncatedInput(MidiDecodeError):
    """A read asked for more bytes than the input still holds."""


class InvalidChunkTag(MidiDecodeError):
    def __init__(self, expected: bytes, found: bytes, offset: Optional[int] = None):
        self.expected = expected
        self.found = found
        super().__init__(f"expected chunk {expected!r}, found {found!r}", offset)


class UnknownChannelEventType(MidiDecodeError):
    def __init__(self, status: int, offset: Optional[int] = None):
        self.status = status
        super().__init__(f"unknown channel event type 0x{status >> 4:x} (status 0x{status:02x})", offset)
