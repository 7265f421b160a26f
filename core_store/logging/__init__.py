# core_store/logging/__init__.py

"""
Logging helpers for core_store.

Library code asks for a logger here and stays decoupled from how logging
is configured:

    from core_store.logging import get_logger

    logger = get_logger(__name__)
    logger.info("user_created", user_id=str(user.id))

Process entrypoints call ``configure_logging`` once at startup.
"""

from __future__ import annotations

from typing import Any, Optional

import structlog

from .config import configure_logging

DEFAULT_LOGGER_NAME = "core_store"


def get_logger(name: Optional[str] = None, **initial_values: Any) -> Any:
    """
    Return a structlog logger bound to ``name`` (default: ``core_store``).

    Extra keyword arguments are bound as context on every record.
    """
    return structlog.get_logger(name or DEFAULT_LOGGER_NAME, **initial_values)


__all__ = ["configure_logging", "get_logger", "DEFAULT_LOGGER_NAME"]
