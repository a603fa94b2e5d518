# render/report.py
from typing import List, Optional

from config import ReportConfig
from midi.events import ChannelEventType, Event, EventKind, MetaEventType
from midi.parser import Header, Song, Track
from notes.model import Note
from timeline.tempo import TempoMap

TEXT_META = range(MetaEventType.TEXT, MetaEventType.CUE_POINT + 1)

def describe_header(h: Header) -> List[str]:
    lines = [f"File type: {h.format}", f"Tracks: {h.ntracks}"]
    if h.is_smpte:
        lines.append(f"Time division: {h.division_value} frames/second")
    else:
        lines.append(f"Time division: {h.division_value} ticks/beat")
    return lines

def describe_event(ev: Event) -> str:
    head = f"Δ{ev.delta:<6}"
    if ev.kind is EventKind.SYSEX:
        return f"{head} SysEx (payload not parsed)"
    if ev.kind is EventKind.META:
        body = f"Meta 0x{ev.status:02x} {ev.name}, length {len(ev.params)}"
        if ev.status in TEXT_META:
            body += f": {ev.params.decode('latin-1')!r}"
        elif ev.status == MetaEventType.SET_TEMPO and len(ev.params) == 3:
            body += f": {int.from_bytes(ev.params, 'big')} us/beat"
        elif ev.params:
            body += f": {list(ev.params)}"
        return f"{head} {body}"

    kind = ev.channel_type
    body = f"ch{ev.channel:<2} {ev.name}"
    if kind in (ChannelEventType.NOTE_OFF, ChannelEventType.NOTE_ON):
        body += f" note={ev.params[0]} velocity={ev.params[1]}"
    elif kind is ChannelEventType.NOTE_AFTERTOUCH:
        body += f" note={ev.params[0]} pressure={ev.params[1]}"
    elif kind is ChannelEventType.CONTROLLER:
        body += f" controller={ev.params[0]} value={ev.params[1]}"
    elif kind is ChannelEventType.PROGRAM_CHANGE:
        body += f" program={ev.params[0]}"
    elif kind is ChannelEventType.CHANNEL_AFTERTOUCH:
        body += f" pressure={ev.params[0]}"
    else:
        body += f" value={ev.pitch_bend}"
    return f"{head} {body}"

def describe_note(n: Note, cfg: ReportConfig, tempo: Optional[TempoMap] = None) -> str:
    label = f"{n.name:>4} ({n.key:3d})" if cfg.note_names else f"{n.key:3d}"
    line = f"{label} vel={n.velocity:3d} ch={n.channel:<2} tick={n.position} dur={n.duration}"
    if tempo is not None:
        start = tempo.seconds(n.position)
        line += f"  [{start:.3f}s +{tempo.seconds(n.end) - start:.3f}s]"
    return line

def describe_track(t: Track, cfg: ReportConfig, tempo: Optional[TempoMap] = None) -> List[str]:
    lines = [f"Track {t.index}", f"{t.length} bytes"]
    if t.error is not None:
        lines.append(f"  ERROR: {t.error}")
        return lines
    if cfg.show_events:
        lines.append(f"Events: {len(t.events)}")
        lines.extend("  " + describe_event(ev) for ev in t.events)
    if cfg.show_notes:
        lines.append(f"Notes: {len(t.notes)}")
        lines.extend("  " + describe_note(n, cfg, tempo) for n in t.notes)
    return lines

def render_song(song: Song, cfg: ReportConfig) -> str:
    tempo = None
    if cfg.seconds and song.header.ticks_per_beat:
        tempo = TempoMap.from_tracks(song.header.ticks_per_beat, (t.events for t in song.tracks))
    out: List[str] = []
    if cfg.show_header:
        out.extend(describe_header(song.header))
        if tempo is not None:
            out.append(f"Initial tempo: {tempo.bpm_at(0):.1f} bpm")
        out.append("")
    for t in song.tracks:
        out.extend(describe_track(t, cfg, tempo))
        out.append("")
    return "\n".join(out).rstrip() + "\n"
