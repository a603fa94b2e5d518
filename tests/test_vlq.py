import pytest

from midi.cursor import ByteCursor
from midi.errors import TruncatedInput
from midi.vlq import VLQ_MAX, encode_vlq, read_vlq

# values from the Standard MIDI File 1.0 VLQ table
KNOWN = [
    (0x00000000, b"\x00"),
    (0x00000040, b"\x40"),
    (0x0000007F, b"\x7f"),
    (0x00000080, b"\x81\x00"),
    (0x00002000, b"\xc0\x00"),
    (0x00003FFF, b"\xff\x7f"),
    (0x00004000, b"\x81\x80\x00"),
    (0x00100000, b"\xc0\x80\x00"),
    (0x001FFFFF, b"\xff\xff\x7f"),
    (0x00200000, b"\x81\x80\x80\x00"),
    (0x08000000, b"\xc0\x80\x80\x00"),
    (0x0FFFFFFF, b"\xff\xff\xff\x7f"),
]


@pytest.mark.parametrize("value,raw", KNOWN)
def test_decode_known_values(value, raw):
    cur = ByteCursor(raw + b"\x90")
    assert read_vlq(cur) == value
    assert cur.pos == len(raw)


@pytest.mark.parametrize("value,raw", KNOWN)
def test_encode_known_values(value, raw):
    assert encode_vlq(value) == raw


def test_round_trip_sizes():
    for value in (0, 1, 127, 128, 300, 16383, 16384, 2097151, 2097152, 123456789, VLQ_MAX):
        raw = encode_vlq(value)
        cur = ByteCursor(raw)
        assert read_vlq(cur) == value
        assert cur.pos == len(raw)
        assert 1 <= len(raw) <= 4


@pytest.mark.parametrize("value", [-1, VLQ_MAX + 1])
def test_encode_out_of_range(value):
    with pytest.raises(ValueError):
        encode_vlq(value)


def test_unterminated_quantity_is_truncated():
    with pytest.raises(TruncatedInput):
        read_vlq(ByteCursor(b"\x81\x80"))
