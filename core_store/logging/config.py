# core_store/logging/config.py

"""
structlog configuration for core_store.

``configure_logging`` wires structlog and the standard library logging
module to emit structured JSON lines (production) or colored console
output (development), so SQLAlchemy's own loggers end up in the same
stream as ours.
"""

from __future__ import annotations

import logging
import sys
from typing import Any, List, Optional

import structlog

from core_store.config import LogFormat, Settings, get_settings


def add_app_name(app_name: str):
    """
    Processor factory stamping every event with the service name.
    """

    def processor(_, __, event_dict):
        event_dict.setdefault("app", app_name)
        return event_dict

    return processor


def _parse_level(value: Optional[str]) -> int:
    """
    Map a level name ('DEBUG', 'info', ...) to a logging constant.
    Unknown names fall back to INFO.
    """
    if not value:
        return logging.INFO
    level = logging.getLevelName(value.strip().upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging(settings: Optional[Settings] = None) -> None:
    """
    Configure structlog and stdlib logging from ``settings``.

    Safe to call more than once; later calls replace the configuration.
    """
    settings = settings or get_settings()
    level = _parse_level(settings.LOG_LEVEL)

    # 1. Processor chain
    processors: List[Any] = [
        structlog.contextvars.merge_contextvars,
        add_app_name(settings.APP_NAME),
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    # 2. Output format
    if settings.LOG_FORMAT == LogFormat.JSON:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    # 3. structlog itself
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=False,
    )

    # 4. Standard library logging (SQLAlchemy engine echo, third parties)
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
        force=True,
    )


__all__ = ["add_app_name", "configure_logging"]
