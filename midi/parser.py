# midi/parser.py
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from config import DecodeConfig
from midi.cursor import ByteCursor
from midi.errors import InvalidChunkTag, MidiDecodeError
from midi.events import Event, EventDecoder
from notes.model import Note
from notes.reduction import reduce_track

log = logging.getLogger(__name__)

HEADER_TAG = b"MThd"
TRACK_TAG = b"MTrk"
HEADER_LEN = 6

@dataclass(frozen=True)
class Header:
    format: int
    ntracks: int
    division: int   # raw 16-bit time-division word

    @property
    def is_smpte(self) -> bool:
        return bool(self.division & 0x8000)

    @property
    def division_value(self) -> int:
        """Low 15 bits: ticks per beat, or the raw SMPTE field."""
        return self.division & 0x7FFF

    @property
    def ticks_per_beat(self) -> Optional[int]:
        return None if self.is_smpte else self.division_value

@dataclass
class Track:
    index: int
    length: int     # declared chunk byte length
    events: List[Event] = field(default_factory=list)
    notes: List[Note] = field(default_factory=list)
    error: Optional[MidiDecodeError] = None

@dataclass
class Song:
    header: Header
    tracks: List[Track] = field(default_factory=list)

def _expect_tag(cur: ByteCursor, tag: bytes):
    at = cur.pos
    found = cur.read_exact(4)
    if found != tag:
        raise InvalidChunkTag(tag, found, at)

def read_header(cur: ByteCursor) -> Header:
    _expect_tag(cur, HEADER_TAG)
    length = cur.read_u32()
    fmt = cur.read_u16()
    ntracks = cur.read_u16()
    division = cur.read_u16()
    if length > HEADER_LEN:
        cur.read_exact(length - HEADER_LEN)
    return Header(format=fmt, ntracks=ntracks, division=division)

def read_events(cur: ByteCursor, length: int) -> List[Event]:
    """Decode events until the chunk's declared byte length is used up."""
    decoder = EventDecoder(cur)
    events: List[Event] = []
    cur.begin_scope()
    while cur.consumed < length:
        ev, _ = decoder.decode()
        events.append(ev)
    return events

def read_track(cur: ByteCursor, index: int, cfg: DecodeConfig) -> Track:
    _expect_tag(cur, TRACK_TAG)
    length = cur.read_u32()
    track = Track(index=index, length=length)
    body_start = cur.pos
    try:
        events = read_events(cur, length)
    except MidiDecodeError as e:
        if cfg.abort_on_track_error:
            raise
        track.error = e
        end = body_start + length
        if end > len(cur):
            log.error("track %d: %s; chunk runs past end of file", index, e)
            end = len(cur)
        else:
            log.error("track %d: %s; skipping rest of chunk", index, e)
        cur.seek(end)
        return track
    track.notes = reduce_track(events)
    if cfg.keep_events:
        track.events = events
    log.debug("track %d: %d bytes, %d events, %d notes", index, length, len(events), len(track.notes))
    return track

def parse_smf(data: bytes, cfg: Optional[DecodeConfig] = None) -> Song:
    cfg = cfg or DecodeConfig()
    cur = ByteCursor(data)
    header = read_header(cur)
    log.info("format %d, %d tracks, division 0x%04x", header.format, header.ntracks, header.division)
    song = Song(header=header)
    for i in range(header.ntracks):
        track = read_track(cur, i, cfg)
        song.tracks.append(track)
        if track.error is not None and not cur.remaining:
            if i + 1 < header.ntracks:
                log.error("file ends inside track %d, %d track(s) missing", i, header.ntracks - i - 1)
            break
    return song

def load_smf(path: str, cfg: Optional[DecodeConfig] = None) -> Song:
    with open(path, "rb") as f:
        data = f.read()
    log.info("loaded %s (%d bytes)", path, len(data))
    return parse_smf(data, cfg)
