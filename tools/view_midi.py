#!/usr/bin/env python3
"""A command line MIDI viewer.

Validates the header of a Standard MIDI File and logs one trace row per
event.  Rows are emitted at debug level, so pass ``-d`` to see them::

    python tools/view_midi.py song.mid -d
"""

from __future__ import annotations

import argparse
import dataclasses
from pathlib import Path
import sys
from typing import Sequence

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

import structlog  # noqa: E402

from tinymid.log import Level, LogConfig, configure_logging  # noqa: E402
from tinymid.midifile import trace_file  # noqa: E402

log = structlog.get_logger("tinymid.cli")


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="view_midi", description="A command line MIDI viewer"
    )
    parser.add_argument("infile", type=Path, help="File to read")
    parser.add_argument(
        "-d",
        "--debug",
        action="count",
        default=0,
        help="Turn debugging information on",
    )
    parser.add_argument(
        "--no-color", action="store_true", help="Disable colored log output"
    )
    parser.add_argument("--version", action="version", version="%(prog)s 0.1")
    args = parser.parse_args(argv)

    config = LogConfig.from_env()
    if args.debug:
        config = dataclasses.replace(config, level=Level.DEBUG)
    if args.no_color:
        config = dataclasses.replace(config, color=False)
    configure_logging(config)

    try:
        traced = trace_file(args.infile)
    except (OSError, EOFError, ValueError) as exc:
        log.error(str(exc))
        return 1

    rows = sum(len(track_rows) for track_rows in traced.values())
    log.info(f"{args.infile.name}: {len(traced)} tracks, {rows} events")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
