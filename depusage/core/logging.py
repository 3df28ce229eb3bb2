"""Structured logging configuration — structlog over stdlib logging.

depusage itself only emits events through ``structlog.get_logger``; an
application embedding it calls :func:`setup_logging` once at startup.
"""

from __future__ import annotations

import logging
import logging.config
import os

import structlog

LOG_LEVEL_ENV = "DEPUSAGE_LOG_LEVEL"
LOG_FORMAT_ENV = "DEPUSAGE_LOG_FORMAT"

_FORMATS = ("console", "json")


def _select_renderer(log_format: str) -> structlog.types.Processor:
    if log_format == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=False)


def setup_logging(level: str | None = None, log_format: str | None = None) -> None:
    """Configure structlog and stdlib logging for the ``depusage`` loggers.

    Explicit arguments win over the environment:
        DEPUSAGE_LOG_LEVEL  — log level (default: INFO)
        DEPUSAGE_LOG_FORMAT — console | json (default: console)
    """
    log_level = (level or os.environ.get(LOG_LEVEL_ENV, "INFO")).upper()
    fmt = (log_format or os.environ.get(LOG_FORMAT_ENV, "console")).lower()
    if fmt not in _FORMATS:
        raise ValueError(f"unknown log format {fmt!r}, expected one of {_FORMATS}")

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
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
                "depusage": {
                    "()": structlog.stdlib.ProcessorFormatter,
                    "foreign_pre_chain": shared_processors,
                    "processors": [
                        structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                        _select_renderer(fmt),
                    ],
                },
            },
            "handlers": {
                "depusage": {
                    "class": "logging.StreamHandler",
                    "stream": "ext://sys.stderr",
                    "formatter": "depusage",
                },
            },
            "loggers": {
                "depusage": {
                    "handlers": ["depusage"],
                    "level": log_level,
                    "propagate": False,
                },
            },
        }
    )
