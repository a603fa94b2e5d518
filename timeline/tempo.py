# timeline/tempo.py
import logging
from bisect import bisect_right
from typing import Iterable, List, Tuple

import mido

from midi.events import Event, EventKind, MetaEventType

log = logging.getLogger(__name__)

DEFAULT_TEMPO = 500000  # default 120 bpm

class TempoMap:
    """Tick -> seconds conversion from the Set Tempo events of a song.
    Changes from every track are merged, as in a format 1 conductor track.
    """
    def __init__(self, ticks_per_beat: int, changes: Iterable[Tuple[int, int]] = ()):
        self.ticks_per_beat = ticks_per_beat
        self.changes: List[Tuple[int, int]] = [(0, DEFAULT_TEMPO)]  # (tick, us per beat)
        for tick, tempo in sorted(changes):
            if tick == self.changes[-1][0]:
                self.changes[-1] = (tick, tempo)
            else:
                self.changes.append((tick, tempo))
        self._ticks = [t for t, _ in self.changes]
        # seconds elapsed at each change
        self._secs = [0.0]
        for (t0, tempo), (t1, _) in zip(self.changes, self.changes[1:]):
            self._secs.append(self._secs[-1] + mido.tick2second(t1 - t0, ticks_per_beat, tempo))

    @classmethod
    def from_tracks(cls, ticks_per_beat: int, tracks: Iterable[Iterable[Event]]) -> "TempoMap":
        found = []
        for events in tracks:
            tick = 0
            for ev in events:
                tick += ev.delta
                if ev.kind is not EventKind.META or ev.status != MetaEventType.SET_TEMPO:
                    continue
                if len(ev.params) != 3:
                    log.warning("Set Tempo at tick %d has %d payload bytes, ignored", tick, len(ev.params))
                    continue
                tempo = int.from_bytes(ev.params, "big")
                if tempo == 0:
                    log.warning("Set Tempo of 0 at tick %d ignored", tick)
                    continue
                found.append((tick, tempo))
        return cls(ticks_per_beat, found)

    def tempo_at(self, tick: int) -> int:
        return self.changes[bisect_right(self._ticks, tick) - 1][1]

    def bpm_at(self, tick: int) -> float:
        return mido.tempo2bpm(self.tempo_at(tick))

    def seconds(self, tick: int) -> float:
        i = bisect_right(self._ticks, tick) - 1
        t0, tempo = self.changes[i]
        return self._secs[i] + mido.tick2second(tick - t0, self.ticks_per_beat, tempo)
