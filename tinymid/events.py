"""Classify MIDI channel-voice, system and meta events.

Status bytes split into two nibbles.  For channel-voice messages the high
nibble is the message kind and the low nibble the channel (0-15).  A high
nibble of 0xF marks a system message (SysEx, clock, reset, ...).

Meta events live in their own namespace: the record carries the meta type
byte (the byte following 0xFF in the file) in ``type`` and is tagged with
``meta=True``.  Meta type bytes never carry a channel.

Lengths in ``EVENT_LENGTHS`` are payload sizes fixed by the event type.
Note On/Off are absent on purpose (their length comes from running status in
the stream), as are the text-bearing meta events whose length is encoded.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, Union

import mido

SYSTEM_NIBBLE = 0xF0
CHANNEL_MASK = 0x0F
KIND_MASK = 0xF0
UNKNOWN_LENGTH = -1

NOTE_NAMES = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]


class EventType(IntEnum):
    # MIDI channel-voice kinds (channel nibble cleared)
    NOTE_OFF = 0x80
    NOTE_ON = 0x90
    KEY_PRESSURE = 0xA0
    CONTROL_CHANGE = 0xB0
    PROGRAM_CHANGE = 0xC0
    CHANNEL_PRESSURE = 0xD0
    PITCH_WHEEL_CHANGE = 0xE0
    # Meta event type bytes
    SEQUENCE_NUMBER = 0x00
    TEXT_EVENT = 0x01
    COPYRIGHT = 0x02
    SEQUENCE_NAME = 0x03
    INSTRUMENT = 0x04
    LYRIC = 0x05
    MARKER_TEXT = 0x06
    CUE_POINT = 0x07
    MIDI_CHANNEL_PREFIX = 0x20
    END_OF_TRACK = 0x2F
    TEMPO = 0x51
    SMPTE_OFFSET = 0x54
    TIME_SIGNATURE = 0x58
    KEY_SIGNATURE = 0x59
    SEQUENCER_SPECIFIC = 0x7F


EVENT_NAMES: Dict[EventType, str] = {
    EventType.NOTE_OFF: "Note off",
    EventType.NOTE_ON: "Note on",
    EventType.KEY_PRESSURE: "Polyphonic key pressure",
    EventType.CONTROL_CHANGE: "Control change",
    EventType.PROGRAM_CHANGE: "Program change",
    EventType.CHANNEL_PRESSURE: "Channel pressure",
    EventType.PITCH_WHEEL_CHANGE: "Pitch wheel change",
    EventType.SEQUENCE_NUMBER: "Sequence number",
    EventType.TEXT_EVENT: "Text event",
    EventType.COPYRIGHT: "Copyright notice",
    EventType.SEQUENCE_NAME: "Sequence or track name",
    EventType.INSTRUMENT: "Instrument name",
    EventType.LYRIC: "Lyric text",
    EventType.MARKER_TEXT: "Marker text",
    EventType.CUE_POINT: "Cue point",
    EventType.MIDI_CHANNEL_PREFIX: "MIDI channel prefix assignment",
    EventType.END_OF_TRACK: "End of track",
    EventType.TEMPO: "Tempo setting",
    EventType.SMPTE_OFFSET: "SMPTE offset",
    EventType.TIME_SIGNATURE: "Time signature",
    EventType.KEY_SIGNATURE: "Key signature",
    EventType.SEQUENCER_SPECIFIC: "Sequencer specific event",
}

EVENT_LENGTHS: Dict[EventType, int] = {
    EventType.KEY_PRESSURE: 2,
    EventType.CONTROL_CHANGE: 2,
    EventType.PROGRAM_CHANGE: 1,
    EventType.CHANNEL_PRESSURE: 1,
    EventType.PITCH_WHEEL_CHANGE: 2,
    EventType.SEQUENCE_NUMBER: 2,
    EventType.MIDI_CHANNEL_PREFIX: 1,
    EventType.END_OF_TRACK: 0,
    EventType.TEMPO: 3,
    EventType.SMPTE_OFFSET: 5,
    EventType.TIME_SIGNATURE: 4,
    EventType.KEY_SIGNATURE: 2,
}

SYSTEM_MESSAGE = "System message"
UNKNOWN_EVENT = "Unknown event type"

Message = Union[mido.Message, mido.MetaMessage]


def event_name(event_type: int) -> str:
    """Return the display name for a status or meta type byte.

    The system-message nibble check wins over the exact-match table.  Meta
    records are told apart by their ``meta`` flag, not by this lookup.
    """

    if (event_type & SYSTEM_NIBBLE) == SYSTEM_NIBBLE:
        return SYSTEM_MESSAGE
    return EVENT_NAMES.get(event_type, UNKNOWN_EVENT)


def event_length(event_type: int) -> int:
    """Return the payload length implied by the type, or -1 if the stream must say."""

    return EVENT_LENGTHS.get(event_type, UNKNOWN_LENGTH)


def channel(event_type: int) -> int:
    return event_type & CHANNEL_MASK


def strip_channel(event_type: int) -> int:
    return event_type & KIND_MASK


def note_name(note: int) -> str:
    """Return a sharps-only note name with MIDI octave numbering (60 -> C4)."""

    return f"{NOTE_NAMES[note % 12]}{note // 12 - 1}"


def message_bytes(msg: Message) -> bytes:
    """Return the bytes ``msg`` occupies in a track, without its delta time."""

    return bytes(msg.bytes())


@dataclass
class Event:
    """One decoded MIDI or meta event."""

    type: int
    meta: bool = False
    note: int = 0
    velocity: int = 0
    tempo: int = 0
    total_time: int = 0
    delta: int = 0

    @property
    def name(self) -> str:
        """Exact-match name of ``type``; unstripped channel bytes read as unknown (see ``kind``)."""

        return event_name(self.type)

    @property
    def length(self) -> int:
        return event_length(self.type)

    @property
    def channel(self) -> int:
        return channel(self.type)

    @property
    def kind(self) -> int:
        """Type byte with the channel nibble cleared for channel messages."""

        if self.meta:
            return self.type
        return strip_channel(self.type)

    @property
    def note_name(self) -> str:
        return note_name(self.note)

    def strip_channel(self) -> None:
        self.type = strip_channel(self.type)

    @classmethod
    def from_message(cls, msg: Message, total_time: int = 0) -> "Event":
        raw = message_bytes(msg)
        if msg.is_meta:
            # FF <type> <len> <data...>
            event = cls(type=raw[1], meta=True)
            if msg.type == "set_tempo":
                event.tempo = msg.tempo
        else:
            event = cls(type=raw[0])
            if msg.type in ("note_on", "note_off"):
                event.note = msg.note
                event.velocity = msg.velocity
        event.delta = msg.time
        event.total_time = total_time
        return event
