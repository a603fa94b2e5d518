# midi/events.py
import logging
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Optional, Tuple

from midi.cursor import ByteCursor
from midi.errors import UnknownChannelEventType
from midi.vlq import read_vlq

log = logging.getLogger(__name__)

META_PREFIX = 0xFF
SYSEX_START = 0xF0
SYSEX_ESCAPE = 0xF7


class EventKind(Enum):
    CHANNEL = "channel"
    META = "meta"
    SYSEX = "sysex"


class ChannelEventType(IntEnum):
    NOTE_OFF = 0x8
    NOTE_ON = 0x9
    NOTE_AFTERTOUCH = 0xA
    CONTROLLER = 0xB
    PROGRAM_CHANGE = 0xC
    CHANNEL_AFTERTOUCH = 0xD
    PITCH_BEND = 0xE


class MetaEventType(IntEnum):
    SEQUENCE_NUMBER = 0x00
    TEXT = 0x01
    COPYRIGHT = 0x02
    TRACK_NAME = 0x03
    INSTRUMENT_NAME = 0x04
    LYRIC = 0x05
    MARKER = 0x06
    CUE_POINT = 0x07
    CHANNEL_PREFIX = 0x20
    MIDI_BUS = 0x21
    END_OF_TRACK = 0x2F
    SET_TEMPO = 0x51
    SMPTE_OFFSET = 0x54
    TIME_SIGNATURE = 0x58
    KEY_SIGNATURE = 0x59
    SEQUENCER_META_EVENT = 0x7F


PARAM_COUNT = {
    ChannelEventType.NOTE_OFF: 2,
    ChannelEventType.NOTE_ON: 2,
    ChannelEventType.NOTE_AFTERTOUCH: 2,
    ChannelEventType.CONTROLLER: 2,
    ChannelEventType.PROGRAM_CHANGE: 1,
    ChannelEventType.CHANNEL_AFTERTOUCH: 1,
    ChannelEventType.PITCH_BEND: 2,
}

CHANNEL_NAMES = {
    ChannelEventType.NOTE_OFF: "Note Off",
    ChannelEventType.NOTE_ON: "Note On",
    ChannelEventType.NOTE_AFTERTOUCH: "Note Aftertouch",
    ChannelEventType.CONTROLLER: "Controller Change",
    ChannelEventType.PROGRAM_CHANGE: "Program Change",
    ChannelEventType.CHANNEL_AFTERTOUCH: "Channel Aftertouch",
    ChannelEventType.PITCH_BEND: "Pitch Bend",
}


def channel_event_type(status: int, offset: Optional[int] = None) -> ChannelEventType:
    """Classify a status byte by its high nibble; raises if it is not a channel event."""
    try:
        return ChannelEventType(status >> 4)
    except ValueError:
        raise UnknownChannelEventType(status, offset) from None


def meta_event_name(meta_type: int) -> str:
    try:
        return MetaEventType(meta_type).name.replace("_", " ").title()
    except ValueError:
        return "Unknown"


@dataclass(frozen=True)
class Event:
    kind: EventKind
    delta: int
    status: int = 0
    params: bytes = b""

    @property
    def channel(self) -> Optional[int]:
        if self.kind is not EventKind.CHANNEL:
            return None
        return self.status & 0x0F

    @property
    def channel_type(self) -> ChannelEventType:
        return channel_event_type(self.status)

    @property
    def name(self) -> str:
        if self.kind is EventKind.CHANNEL:
            return CHANNEL_NAMES[self.channel_type]
        if self.kind is EventKind.META:
            return meta_event_name(self.status)
        return "SysEx"

    @property
    def pitch_bend(self) -> int:
        """14-bit bend value (LSB first on the wire), 0x2000 is center."""
        lsb, msb = self.params
        return (msb << 7) | lsb


class EventDecoder:
    """
    Decodes the events of one track. Holds the running status byte,
    which starts at 0 for every new track.
    """
    def __init__(self, cursor: ByteCursor):
        self.cursor = cursor
        self.running_status = 0

    def decode(self) -> Tuple[Event, int]:
        cur = self.cursor
        start = cur.pos
        delta = read_vlq(cur)
        status_at = cur.pos
        status = cur.read_u8()

        if status == META_PREFIX:
            meta_type = cur.read_u8()
            length = cur.read_u8()
            payload = cur.read_exact(length)
            event = Event(EventKind.META, delta, meta_type, payload)
        elif status in (SYSEX_START, SYSEX_ESCAPE):
            # payload 未讀取：含 SysEx 的檔案之後的事件會錯位
            log.warning("SysEx 0x%02x at byte %d left unparsed; following events may be misaligned",
                        status, status_at)
            event = Event(EventKind.SYSEX, delta)
        else:
            if status < 0x80:
                # running status: this byte is the first data byte
                cur.seek_back(1)
                status = self.running_status
            else:
                self.running_status = status
            kind = channel_event_type(status, status_at)
            params = cur.read_exact(PARAM_COUNT[kind])
            event = Event(EventKind.CHANNEL, delta, status, params)

        return event, cur.pos - start
