# midi/cursor.py
from midi.errors import TruncatedInput


class ByteCursor:
    """
    Sequential big-endian reader over an in-memory buffer.

    The cursor owns its consumed-byte count: ``begin_scope()`` marks the
    current position and ``consumed`` reports how far reading has advanced
    since then (seek_back lowers it again).
    """
    def __init__(self, data: bytes):
        self._data = memoryview(bytes(data))
        self.pos = 0
        self._scope_start = 0

    def __len__(self) -> int:
        return len(self._data)

    @property
    def remaining(self) -> int:
        return len(self._data) - self.pos

    @property
    def consumed(self) -> int:
        return self.pos - self._scope_start

    def begin_scope(self):
        self._scope_start = self.pos

    def read_exact(self, n: int) -> bytes:
        if n < 0:
            raise ValueError("n must be non-negative")
        if self.remaining < n:
            raise TruncatedInput(f"wanted {n} bytes, only {self.remaining} left", self.pos)
        start = self.pos
        self.pos += n
        return bytes(self._data[start:self.pos])

    def read_u8(self) -> int:
        return self.read_exact(1)[0]

    def read_u16(self) -> int:
        return int.from_bytes(self.read_exact(2), "big")

    def read_u32(self) -> int:
        return int.from_bytes(self.read_exact(4), "big")

    def seek_back(self, n: int = 1):
        if n < 0 or n > self.pos:
            raise ValueError(f"cannot seek back {n} bytes from {self.pos}")
        self.pos -= n

    def seek(self, offset: int):
        # 越界時視為截斷輸入
        if offset < 0 or offset > len(self._data):
            raise TruncatedInput(f"seek to {offset} outside {len(self._data)} bytes", self.pos)
        self.pos = offset
