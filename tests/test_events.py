"""Tests for status-byte classification and the mido adapter."""

from pathlib import Path
import sys

import mido
import pytest

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from tinymid.events import (  # noqa: E402
    EVENT_LENGTHS,
    EVENT_NAMES,
    Event,
    EventType,
    channel,
    event_length,
    event_name,
    message_bytes,
    note_name,
    strip_channel,
)


# ── event_name ───────────────────────────────────────────────────────


class TestEventName:
    @pytest.mark.parametrize("status", range(0xF0, 0x100))
    def test_system_nibble_always_wins(self, status):
        assert event_name(status) == "System message"

    def test_note_on_and_off(self):
        assert event_name(EventType.NOTE_ON) == "Note on"
        assert event_name(EventType.NOTE_OFF) == "Note off"

    def test_table_has_every_type(self):
        assert len(EVENT_NAMES) == 22
        assert set(EVENT_NAMES) == set(EventType)

    @pytest.mark.parametrize(
        "event_type, expected",
        [
            (0xA0, "Polyphonic key pressure"),
            (0xB0, "Control change"),
            (0xC0, "Program change"),
            (0xD0, "Channel pressure"),
            (0xE0, "Pitch wheel change"),
            (0x00, "Sequence number"),
            (0x01, "Text event"),
            (0x02, "Copyright notice"),
            (0x03, "Sequence or track name"),
            (0x04, "Instrument name"),
            (0x05, "Lyric text"),
            (0x06, "Marker text"),
            (0x07, "Cue point"),
            (0x20, "MIDI channel prefix assignment"),
            (0x2F, "End of track"),
            (0x51, "Tempo setting"),
            (0x54, "SMPTE offset"),
            (0x58, "Time signature"),
            (0x59, "Key signature"),
            (0x7F, "Sequencer specific event"),
        ],
    )
    def test_canonical_bytes(self, event_type, expected):
        assert event_name(event_type) == expected

    @pytest.mark.parametrize("event_type", [0x08, 0x21, 0x60, 0x91, 0xEF])
    def test_unknown_fallback(self, event_type):
        """Unstripped channel bytes are not in the exact-match table."""
        assert event_name(event_type) == "Unknown event type"


# ── event_length ─────────────────────────────────────────────────────


class TestEventLength:
    def test_tabulated_lengths(self):
        assert EVENT_LENGTHS == {
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
        for event_type, length in EVENT_LENGTHS.items():
            assert event_length(event_type) == length

    def test_every_other_byte_is_variable(self):
        for value in range(256):
            if value in EVENT_LENGTHS:
                continue
            assert event_length(value) == -1

    def test_note_and_text_events_are_variable(self):
        assert event_length(EventType.NOTE_ON) == -1
        assert event_length(EventType.NOTE_OFF) == -1
        assert event_length(EventType.TEXT_EVENT) == -1
        assert event_length(EventType.SEQUENCER_SPECIFIC) == -1


# ── channel helpers and note names ───────────────────────────────────


def test_channel_is_low_nibble():
    assert channel(0x91) == 1
    assert channel(0x9F) == 15
    assert channel(0x80) == 0


def test_strip_channel():
    assert strip_channel(0x91) == 0x90
    assert strip_channel(0xEC) == 0xE0


def test_event_strip_channel_mutates_in_place():
    event = Event(type=0x91)
    event.strip_channel()
    assert event.type == 0x90
    assert event.channel == 0
    assert event.name == "Note on"


def test_event_name_is_exact_match_on_type():
    event = Event(type=0x91)
    assert event.name == "Unknown event type"
    assert event_name(event.kind) == "Note on"


@pytest.mark.parametrize(
    "note, expected",
    [
        (60, "C4"),
        (69, "A4"),
        (0, "C-1"),
        (12, "C0"),
        (61, "C#4"),
        (70, "A#4"),
        (127, "G9"),
        (-1, "B-2"),
    ],
)
def test_note_name(note, expected):
    assert note_name(note) == expected


def test_note_names_use_sharps_only():
    names = {note_name(n)[:-1].rstrip("-") for n in range(12, 24)}
    assert not any("b" in name for name in names)
    assert len(names) == 12


# ── Event.from_message ───────────────────────────────────────────────


class TestFromMessage:
    def test_note_on_keeps_channel_nibble(self):
        msg = mido.Message("note_on", channel=1, note=60, velocity=100, time=96)
        event = Event.from_message(msg, total_time=480)
        assert event.type == 0x91
        assert not event.meta
        assert event.channel == 1
        assert event.kind == EventType.NOTE_ON
        assert (event.note, event.velocity) == (60, 100)
        assert (event.total_time, event.delta) == (480, 96)

    def test_control_change(self):
        msg = mido.Message("control_change", channel=3, control=7, value=90)
        event = Event.from_message(msg)
        assert event.type == 0xB3
        assert event.kind == EventType.CONTROL_CHANGE
        assert event.note == 0

    def test_set_tempo_is_meta(self):
        msg = mido.MetaMessage("set_tempo", tempo=500000, time=0)
        event = Event.from_message(msg)
        assert event.meta
        assert event.type == EventType.TEMPO
        assert event.kind == EventType.TEMPO
        assert event.tempo == 500000
        assert event.length == 3

    def test_end_of_track(self):
        event = Event.from_message(mido.MetaMessage("end_of_track"))
        assert event.meta
        assert event.name == "End of track"
        assert event.length == 0

    def test_sysex_is_system_message(self):
        event = Event.from_message(mido.Message("sysex", data=[0x7E, 0x00]))
        assert event.type == 0xF0
        assert event.name == "System message"


def test_message_bytes_for_meta_include_prefix_and_size():
    raw = message_bytes(mido.MetaMessage("set_tempo", tempo=500000))
    assert raw == bytes([0xFF, 0x51, 0x03, 0x07, 0xA1, 0x20])
