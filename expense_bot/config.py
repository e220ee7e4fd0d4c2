"""Application configuration utilities.

This module loads and validates application configuration from environment
variables. It exposes a :func:`get_settings` helper that returns a cached
instance of :class:`Settings` with typed access to bot, Notion and logging
options.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Final
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

load_dotenv()


class ConfigurationError(RuntimeError):
    """Raised when mandatory configuration values are missing or invalid."""


@dataclass(slots=True)
class BotConfig:
    """Telegram bot related configuration."""

    token: str


@dataclass(slots=True)
class NotionConfig:
    """Notion API connection settings."""

    token: str
    database_id: str
    version: str
    timeout: float
    category_cache_ttl: float


@dataclass(slots=True)
class LoggingConfig:
    """Logging related configuration settings."""

    level: str
    directory: str
    environment: str

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


@dataclass(slots=True)
class Settings:
    """Container for all application settings."""

    bot: BotConfig
    notion: NotionConfig
    logging: LoggingConfig
    timezone: ZoneInfo


DEFAULT_NOTION_VERSION: Final[str] = "2022-06-28"
DEFAULT_NOTION_TIMEOUT: Final[float] = 30.0
DEFAULT_CACHE_TTL: Final[float] = 5 * 60.0
DEFAULT_TIMEZONE: Final[str] = "Europe/Moscow"
DEFAULT_LOG_LEVEL: Final[str] = "INFO"
DEFAULT_LOG_DIR: Final[str] = "./logs"
PRODUCTION_LOG_DIR: Final[str] = "/var/log/notion_expense_bot"
DEFAULT_ENVIRONMENT: Final[str] = "development"


def _require(name: str) -> str:
    value = os.getenv(name)
    if not value:
        raise ConfigurationError(f"{name} environment variable is required")
    return value


def _positive_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from exc
    if value <= 0:
        raise ConfigurationError(f"{name} must be positive, got {raw!r}")
    return value


def _load_bot_config() -> BotConfig:
    return BotConfig(token=_require("TELEGRAM_TOKEN"))


def _load_notion_config() -> NotionConfig:
    return NotionConfig(
        token=_require("NOTION_TOKEN"),
        database_id=_require("DATABASE_ID"),
        version=os.getenv("NOTION_VERSION", DEFAULT_NOTION_VERSION),
        timeout=_positive_float("NOTION_TIMEOUT", DEFAULT_NOTION_TIMEOUT),
        category_cache_ttl=_positive_float("CATEGORY_CACHE_TTL", DEFAULT_CACHE_TTL),
    )


def _load_logging_config() -> LoggingConfig:
    environment = os.getenv("APP_ENV", DEFAULT_ENVIRONMENT).strip().lower()
    default_dir = PRODUCTION_LOG_DIR if environment == "production" else DEFAULT_LOG_DIR
    return LoggingConfig(
        level=os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
        directory=os.getenv("LOG_DIR", default_dir),
        environment=environment,
    )


def _load_timezone() -> ZoneInfo:
    name = os.getenv("TIMEZONE", DEFAULT_TIMEZONE)
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ConfigurationError(f"Unknown time zone: {name!r}") from exc


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings loaded from environment variables."""

    return Settings(
        bot=_load_bot_config(),
        notion=_load_notion_config(),
        logging=_load_logging_config(),
        timezone=_load_timezone(),
    )


__all__ = [
    "BotConfig",
    "NotionConfig",
    "LoggingConfig",
    "Settings",
    "ConfigurationError",
    "get_settings",
]
