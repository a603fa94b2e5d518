# ========================= notes/reduction.py =========================
import logging
from typing import Dict, Iterable, List, Optional
from midi.events import ChannelEventType, Event, EventKind
from notes.model import Note, OpenNote

log = logging.getLogger(__name__)

class NoteAssembler:
    """Pairs Note On with Note Off (or velocity-0 Note On) within one track.

    Open notes are keyed by pitch only; striking a key that is already held
    replaces the earlier open note. Notes still open when the track ends are
    never emitted.
    """
    def __init__(self):
        self.position = 0
        self.open: Dict[int, OpenNote] = {}

    def feed(self, event: Event) -> Optional[Note]:
        self.position += event.delta
        if event.kind is not EventKind.CHANNEL:
            return None

        kind = event.channel_type
        if kind is ChannelEventType.NOTE_OFF or (kind is ChannelEventType.NOTE_ON and event.params[1] == 0):
            key = event.params[0]
            opened = self.open.pop(key, None)
            if opened is None:
                return None
            return Note(key=key, velocity=opened.velocity, position=opened.position,
                        duration=self.position - opened.position,
                        channel=opened.channel)
        if kind is ChannelEventType.NOTE_ON:
            key, vel = event.params[0], event.params[1]
            if key in self.open:
                log.debug("key %d re-struck at tick %d, dropping open note from tick %d",
                          key, self.position, self.open[key].position)
            self.open[key] = OpenNote(key=key, velocity=vel, position=self.position,
                                     channel=event.channel)
        return None

def reduce_track(events: Iterable[Event]) -> List[Note]:
    """Notes of one track, in the order their release was seen."""
    asm = NoteAssembler()
    out: List[Note] = []
    for ev in events:
        note = asm.feed(ev)
        if note is not None:
            out.append(note)
    if asm.open:
        log.debug("%d notes still open at end of track, discarded", len(asm.open))
    return out
