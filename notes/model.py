# notes/model.py
from dataclasses import dataclass

NOTE_NAMES = ("C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B")

@dataclass
class OpenNote:
    key: int        # MIDI note number
    velocity: int
    position: int   # absolute tick of the Note On
    channel: int = 0

@dataclass(frozen=True)
class Note:
    key: int        # MIDI note number
    velocity: int
    position: int   # ticks
    duration: int   # ticks
    channel: int = 0

    @property
    def end(self) -> int:
        return self.position + self.duration

    @property
    def name(self) -> str:
        return note_name(self.key)

def note_name(key: int) -> str:
    """60 -> 'C4' (middle C)."""
    return f"{NOTE_NAMES[key % 12]}{key // 12 - 1}"
