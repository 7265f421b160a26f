# core_store/config.py

"""
Configuration for the core_store persistence layer.

Values are read from environment variables (or a local ``.env`` file) via
pydantic-settings:

- APP_NAME       Service name attached to log records.
- APP_ENV        "development", "production" or "testing".
- DEBUG          Enables verbose behaviour (SQL echo falls back to it).
- DATABASE_URL   SQLAlchemy URL. Default: "sqlite:///./core_store.db"
- DB_ECHO        Echo SQL statements to the log.
- LOG_LEVEL      Root log level name. Default: "INFO"
- LOG_FORMAT     "json" (machine readable) or "console" (colored dev output).

Typical usage:

    from core_store.config import get_settings

    settings = get_settings()
    engine = build_engine(settings.DATABASE_URL, echo=settings.sql_echo)
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class AppEnv(str, Enum):
    DEVELOPMENT = "development"
    PRODUCTION = "production"
    TESTING = "testing"


class LogFormat(str, Enum):
    JSON = "json"
    CONSOLE = "console"


class Settings(BaseSettings):
    """
    Central configuration registry.
    Strictly typed and validated via Pydantic.
    """

    # --- Application Meta ---
    APP_NAME: str = "core-store"
    APP_ENV: AppEnv = AppEnv.DEVELOPMENT
    DEBUG: bool = False

    # --- Persistence ---
    DATABASE_URL: str = "sqlite:///./core_store.db"
    DB_ECHO: Optional[bool] = None

    # --- Logging ---
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: LogFormat = LogFormat.JSON

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def sql_echo(self) -> bool:
        """DB_ECHO when set explicitly, otherwise the DEBUG flag."""
        if self.DB_ECHO is None:
            return self.DEBUG
        return self.DB_ECHO


# Singleton configuration instance
_SETTINGS: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Return the global Settings instance, creating it from the environment
    on first use.
    """
    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = Settings()
    return _SETTINGS


def set_settings(settings: Optional[Settings]) -> None:
    """
    Replace the global Settings instance.

    Mainly useful for tests. Passing ``None`` forces the next
    ``get_settings()`` call to re-read the environment.
    """
    global _SETTINGS
    _SETTINGS = settings


__all__ = ["AppEnv", "LogFormat", "Settings", "get_settings", "set_settings"]
