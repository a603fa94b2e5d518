# midi/vlq.py
from midi.cursor import ByteCursor

VLQ_MAX = 0x0FFFFFFF  # 4 bytes worth of 7-bit groups


def read_vlq(cursor: ByteCursor) -> int:
    """Decode one variable-length quantity, most significant 7-bit group first."""
    value = 0
    while True:
        byte = cursor.read_u8()
        value = (value << 7) | (byte & 0x7F)
        if not byte & 0x80:
            return value


def encode_vlq(value: int) -> bytes:
    if value < 0 or value > VLQ_MAX:
        raise ValueError(f"VLQ value out of range: {value}")
    out = [value & 0x7F]
    value >>= 7
    while value:
        out.append((value & 0x7F) | 0x80)
        value >>= 7
    return bytes(reversed(out))
