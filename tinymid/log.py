"""Logging configuration: structlog on top of stdlib logging.

Level and color are process-wide settings applied once by
``configure_logging``.  Library modules only ask for a logger.
"""

from __future__ import annotations

import logging
import logging.config
import os
from dataclasses import dataclass
from enum import IntEnum

import structlog


class Level(IntEnum):
    DEBUG = logging.DEBUG
    STATUS = logging.INFO
    WARN = logging.WARNING
    ERROR = logging.ERROR

    @classmethod
    def parse(cls, value: str) -> "Level":
        name = value.strip().upper()
        aliases = {"INFO": "STATUS", "WARNING": "WARN"}
        name = aliases.get(name, name)
        try:
            return cls[name]
        except KeyError:
            choices = ", ".join(member.name.lower() for member in cls)
            raise ValueError(f"unknown log level {value!r} (expected one of: {choices})") from None


@dataclass(frozen=True)
class LogConfig:
    level: Level = Level.STATUS
    color: bool = True

    @classmethod
    def from_env(cls) -> "LogConfig":
        """Read ``TINYMID_LOG_LEVEL`` (default: status) and ``TINYMID_LOG_COLOR`` (default: on)."""

        level = Level.parse(os.environ.get("TINYMID_LOG_LEVEL", "status"))
        color = os.environ.get("TINYMID_LOG_COLOR", "1").strip().lower() not in ("0", "false", "no", "off")
        return cls(level=level, color=color)


def configure_logging(config: LogConfig) -> None:
    shared_processors: list[structlog.types.Processor] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    structlog.configure(
        processors=shared_processors
        + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "structlog": {
                    "()": structlog.stdlib.ProcessorFormatter,
                    "foreign_pre_chain": shared_processors,
                    "processors": [
                        structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                        structlog.dev.ConsoleRenderer(colors=config.color),
                    ],
                },
            },
            "handlers": {
                "default": {
                    "class": "logging.StreamHandler",
                    "stream": "ext://sys.stderr",
                    "formatter": "structlog",
                },
            },
            "root": {
                "handlers": ["default"],
                "level": logging.WARNING,
            },
            "loggers": {
                "tinymid": {"level": int(config.level)},
                "mido": {"level": logging.WARNING},
            },
        }
    )
