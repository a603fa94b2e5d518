from midi.events import Event, EventKind
from notes.model import Note, note_name
from notes.reduction import NoteAssembler, reduce_track


def on(delta, key, vel, ch=0):
    return Event(EventKind.CHANNEL, delta, 0x90 | ch, bytes([key, vel]))


def off(delta, key, vel=0, ch=0):
    return Event(EventKind.CHANNEL, delta, 0x80 | ch, bytes([key, vel]))


def test_note_on_then_off():
    assert reduce_track([on(0, 60, 100), off(10, 60)]) == [
        Note(key=60, velocity=100, position=0, duration=10)]


def test_zero_velocity_note_on_releases():
    assert reduce_track([on(0, 60, 100), on(5, 60, 0)]) == [
        Note(key=60, velocity=100, position=0, duration=5)]


def test_unmatched_release_is_ignored():
    assert reduce_track([off(0, 60)]) == []
    assert reduce_track([on(0, 60, 0)]) == []


def test_restrike_replaces_open_note():
    notes = reduce_track([on(0, 60, 100), on(3, 60, 90), off(4, 60)])
    assert notes == [Note(key=60, velocity=90, position=3, duration=4)]


def test_notes_come_out_in_release_order():
    events = [on(0, 60, 100), on(2, 64, 80), off(3, 64), off(5, 60)]
    notes = reduce_track(events)
    assert [n.key for n in notes] == [64, 60]
    assert notes[0] == Note(key=64, velocity=80, position=2, duration=3)
    assert notes[1] == Note(key=60, velocity=100, position=0, duration=10)


def test_other_events_advance_position_only():
    events = [
        Event(EventKind.META, 4, 0x03, b"Piano"),
        on(0, 60, 100),
        Event(EventKind.CHANNEL, 6, 0xB0, bytes([7, 100])),
        Event(EventKind.CHANNEL, 1, 0xE0, bytes([0, 64])),
        Event(EventKind.SYSEX, 2),
        off(1, 60),
    ]
    assert reduce_track(events) == [Note(key=60, velocity=100, position=4, duration=10)]


def test_open_notes_at_end_are_dropped():
    events = [on(0, 60, 100), on(0, 62, 100), off(8, 62), Event(EventKind.META, 0, 0x2F)]
    assert reduce_track(events) == [Note(key=62, velocity=100, position=0, duration=8)]


def test_key_matching_ignores_channel():
    notes = reduce_track([on(0, 60, 100, ch=2), off(7, 60, ch=5)])
    assert notes == [Note(key=60, velocity=100, position=0, duration=7, channel=2)]


def test_assembler_feed():
    asm = NoteAssembler()
    assert asm.feed(on(10, 48, 70)) is None
    assert 48 in asm.open
    note = asm.feed(off(20, 48))
    assert note.end == 30
    assert asm.position == 30
    assert not asm.open


def test_note_names():
    assert note_name(60) == "C4"
    assert note_name(61) == "C#4"
    assert note_name(21) == "A0"
    assert note_name(0) == "C-1"
    assert Note(key=69, velocity=1, position=0, duration=1).name == "A4"
