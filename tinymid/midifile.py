from __future__ import annotations

import io
from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path
from typing import Dict, List

import mido
import structlog

from .trace import trace_messages

log = structlog.get_logger("tinymid.midifile")

HEADER_ID = "MThd"
HEADER_LENGTH = 6
HEADER_SIZE = 8 + HEADER_LENGTH


class FileFormat(IntEnum):
    SINGLE_TRACK = 0
    MULTIPLE_TRACK = 1
    MULTIPLE_SONG = 2


FORMAT_NAMES = {
    FileFormat.SINGLE_TRACK: "Single Track File Format",
    FileFormat.MULTIPLE_TRACK: "Multiple Track File Format",
    FileFormat.MULTIPLE_SONG: "Multiple Song File Format",
}


@dataclass(frozen=True)
class MidiHeader:
    """The ``MThd`` chunk at the start of a Standard MIDI File."""

    format: FileFormat
    track_count: int
    division: int  # >0 ticks per beat, <0 SMPTE

    @property
    def smpte(self) -> bool:
        return self.division < 0

    @classmethod
    def from_bytes(cls, data: bytes) -> "MidiHeader":
        if len(data) < HEADER_SIZE:
            raise ValueError("File ended unexpectedly")

        identifier = data[0:4].decode("latin-1")
        if identifier != HEADER_ID:
            raise ValueError(
                f'Wrong identifier for header chunk: Expected "{HEADER_ID}" but got "{identifier}"'
            )

        header_length = int.from_bytes(data[4:8], "big")
        if header_length != HEADER_LENGTH:
            raise ValueError(
                f"Wrong header chunk length: Expected 0x06 but got {header_length:#06x}"
            )

        format_word = int.from_bytes(data[8:10], "big")
        try:
            file_format = FileFormat(format_word)
        except ValueError:
            raise ValueError(f"Invalid file format: {format_word}") from None
        log.debug(FORMAT_NAMES[file_format])

        track_count = int.from_bytes(data[10:12], "big")
        if track_count == 0:
            raise ValueError("MIDI File must have at least one track chunk")

        division = int.from_bytes(data[12:14], "big", signed=True)
        if division > 0:
            log.debug("Division given in ticks per beat")
        elif division < 0:
            log.debug("Division given in SMPTE format")
        else:
            raise ValueError("Division cannot be zero")

        return cls(format=file_format, track_count=track_count, division=division)


def read_file(path: Path) -> bytes:
    return Path(path).read_bytes()


def trace_file(path: Path) -> Dict[int, List[str]]:
    """Validate the header of ``path`` and trace every track, keyed by track index."""

    data = read_file(path)
    header = MidiHeader.from_bytes(data)
    mid = mido.MidiFile(file=io.BytesIO(data))
    log.debug(f"{len(mid.tracks)} of {header.track_count} track chunks read")

    traced: Dict[int, List[str]] = {}
    for index, track in enumerate(mid.tracks):
        log.debug(f"Track {index}: {track.name or '(unnamed)'}")
        traced[index] = trace_messages(track)
    return traced
