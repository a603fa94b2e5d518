import pytest

from midi.vlq import encode_vlq


def _chunk(tag: bytes, body: bytes) -> bytes:
    return tag + len(body).to_bytes(4, "big") + body


@pytest.fixture
def track_body():
    """Build track bytes from (delta, raw event bytes) pairs."""
    def build(*events):
        return b"".join(encode_vlq(delta) + bytes(raw) for delta, raw in events)
    return build


@pytest.fixture
def smf():
    """Wrap track bodies in a header chunk and MTrk chunks."""
    def build(*bodies, fmt=1, division=96):
        header = _chunk(b"MThd", fmt.to_bytes(2, "big") + len(bodies).to_bytes(2, "big")
                        + division.to_bytes(2, "big"))
        return header + b"".join(_chunk(b"MTrk", body) for body in bodies)
    return build
