import pytest

from midi.events import Event, EventKind
from timeline.tempo import DEFAULT_TEMPO, TempoMap


def tempo_event(delta, tempo):
    return Event(EventKind.META, delta, 0x51, tempo.to_bytes(3, "big"))


def test_default_tempo():
    tm = TempoMap(480)
    assert tm.tempo_at(10000) == DEFAULT_TEMPO
    assert tm.bpm_at(0) == pytest.approx(120.0)
    assert tm.seconds(480) == pytest.approx(0.5)


def test_tempo_change_segments():
    tm = TempoMap(480, [(480, 250000)])
    assert tm.seconds(480) == pytest.approx(0.5)
    assert tm.seconds(960) == pytest.approx(0.75)
    assert tm.tempo_at(479) == DEFAULT_TEMPO
    assert tm.tempo_at(480) == 250000
    assert tm.bpm_at(960) == pytest.approx(240.0)


def test_change_at_zero_replaces_default():
    tm = TempoMap(96, [(0, 1000000)])
    assert tm.changes == [(0, 1000000)]
    assert tm.seconds(96) == pytest.approx(1.0)


def test_from_tracks_merges_and_skips_bad_payloads():
    conductor = [tempo_event(0, 600000), tempo_event(96, 300000)]
    other = [
        Event(EventKind.CHANNEL, 10, 0x90, bytes([60, 1])),
        Event(EventKind.META, 0, 0x51, b"\x01\x02"),
        tempo_event(0, 0),
    ]
    tm = TempoMap.from_tracks(96, [conductor, other])
    assert tm.changes == [(0, 600000), (96, 300000)]
    assert tm.seconds(192) == pytest.approx(0.9)
