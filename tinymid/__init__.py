"""Classify and trace MIDI file events."""

from .events import (  # noqa: F401
    EVENT_LENGTHS,
    EVENT_NAMES,
    NOTE_NAMES,
    UNKNOWN_LENGTH,
    Event,
    EventType,
    channel,
    event_length,
    event_name,
    message_bytes,
    note_name,
    strip_channel,
)
from .log import Level, LogConfig, configure_logging  # noqa: F401
from .midifile import FileFormat, MidiHeader, read_file, trace_file  # noqa: F401
from .trace import (  # noqa: F401
    format_column,
    format_row,
    hex_dump,
    log_event,
    to_hex_string,
    trace_messages,
)
