"""Fixed-width trace rows for decoded MIDI events.

Row layout (columns left-justified, space padded, never truncated)::

    offset | hex dump                               | total  | delta  | name                      | channel    | detail

The hex-dump column is the only one with a hard width: dumps longer than
39 characters lose a middle slice, replaced by ``[...]``.
"""

from __future__ import annotations

from typing import Iterable, List

import structlog

from .events import Event, EventType, Message, event_name, message_bytes

log = structlog.get_logger("tinymid.trace")

OFFSET_WIDTH = 6
HEX_WIDTH = 39
TIME_WIDTH = 6
NAME_WIDTH = 25
CHANNEL_WIDTH = 10
NOTE_WIDTH = 9
TEMPO_WIDTH = 6

ELIDE_AT = 27
ELIDE_KEEP = 34
ELISION = "[...]"


def to_hex_string(num: int, padded: bool = True) -> str:
    """Hex for offsets (``0x0010``) or, with ``padded=False``, bare bytes (``3c``)."""

    if padded:
        return f"0x{num:04x}"
    return f"{num & 0xFF:02x}"


def format_column(text: str, width: int) -> str:
    """Left-justify ``text`` in ``width`` columns.  Longer text is left as is."""

    return f"{text:<{width}}"


def hex_dump(data: bytes, offset: int, length: int) -> str:
    if offset < 0 or length < 0 or offset + length > len(data):
        raise ValueError(
            f"byte window [{offset}, {offset + length}) outside buffer of {len(data)} bytes"
        )
    content = "".join(to_hex_string(b, False) + " " for b in data[offset : offset + length])
    if len(content) > HEX_WIDTH:
        cut = len(content) - ELIDE_KEEP
        if cut > 0 and ELIDE_AT + cut <= len(content):
            content = content[:ELIDE_AT] + ELISION + content[ELIDE_AT + cut :]
    return content


def detail_field(event: Event) -> str:
    kind = event.kind
    if kind in (EventType.NOTE_ON, EventType.NOTE_OFF):
        return format_column("Note " + event.note_name, NOTE_WIDTH) + f"at velocity {event.velocity}"
    if kind == EventType.TEMPO:
        return format_column(str(event.tempo), TEMPO_WIDTH) + " us per quarter note"
    return ""


def format_row(event: Event, offset: int, data: bytes, length: int) -> str:
    """Render one trace row for ``event`` whose bytes sit at ``data[offset:offset + length]``."""

    if event.meta:
        channel_text = " " * CHANNEL_WIDTH
    else:
        channel_text = format_column(f"Channel {event.channel}", CHANNEL_WIDTH)

    row = format_column(to_hex_string(offset), OFFSET_WIDTH)
    row += " | "
    row += format_column(hex_dump(data, offset, length), HEX_WIDTH)
    row += "| "
    row += format_column(str(event.total_time), TIME_WIDTH)
    row += " | "
    row += format_column(str(event.delta), TIME_WIDTH)
    row += " | "
    # Channel messages are named by kind so every channel reads the same.
    row += format_column(event_name(event.kind), NAME_WIDTH)
    row += " | "
    row += channel_text
    row += " | "
    row += detail_field(event)
    return row


def log_event(event: Event, offset: int, data: bytes, length: int) -> str:
    row = format_row(event, offset, data, length)
    log.debug(row)
    return row


def trace_messages(messages: Iterable[Message]) -> List[str]:
    """Trace every message of one track.

    The track's event bytes (delta times excluded) are rebuilt into one
    buffer so each row can point at its own slice of it.
    """

    stream = bytearray()
    rows: List[str] = []
    total_time = 0
    for msg in messages:
        total_time += msg.time
        raw = message_bytes(msg)
        offset = len(stream)
        stream.extend(raw)
        event = Event.from_message(msg, total_time=total_time)
        rows.append(log_event(event, offset, stream, len(raw)))
    return rows
