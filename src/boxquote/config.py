"""Centralised configuration using pydantic-settings.

All environment variables are read through the Settings class.
Consumers call ``get_settings()`` to obtain a cached, validated instance.
Tests construct ``Settings(_env_file=None, ...)`` directly for isolation.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

TITLE_PLACEHOLDER = "%s"


# ---------------------------------------------------------------------------
# Sub-models (one per configuration domain)
# ---------------------------------------------------------------------------
class DecorationStyle(BaseModel):
    """Marker strings and title template used to draw a box.

    Immutable, so a style can be passed around and shared between
    operations (and tests) without one caller changing another's boxes.
    """

    model_config = ConfigDict(frozen=True)

    top_and_tail: str = "----"
    top_corner: str = ","
    bottom_corner: str = "`"
    side: str = "| "
    title_format: str = "[ %s ]"

    @field_validator("top_corner", "bottom_corner", "side")
    @classmethod
    def _non_empty(cls, value: str) -> str:
        if not value:
            msg = "marker strings must not be empty"
            raise ValueError(msg)
        return value

    @field_validator("top_and_tail", "top_corner", "bottom_corner", "side")
    @classmethod
    def _single_line(cls, value: str) -> str:
        if "\n" in value:
            msg = "marker strings must not contain a newline"
            raise ValueError(msg)
        return value

    @field_validator("title_format")
    @classmethod
    def _one_placeholder(cls, value: str) -> str:
        if value.replace("%%", "").count(TITLE_PLACEHOLDER) != 1:
            msg = f"title_format must contain {TITLE_PLACEHOLDER!r} exactly once"
            raise ValueError(msg)
        try:
            rendered = value % "x"
        except (TypeError, ValueError) as exc:
            msg = f"title_format is not a valid %-format: {exc}"
            raise ValueError(msg) from exc
        if "\n" in rendered:
            msg = "title_format must not contain a newline"
            raise ValueError(msg)
        return value

    @model_validator(mode="after")
    def _distinct_corners(self) -> DecorationStyle:
        if self.top_corner == self.bottom_corner:
            msg = "top_corner and bottom_corner must differ"
            raise ValueError(msg)
        return self

    @property
    def top_marker(self) -> str:
        return self.top_corner + self.top_and_tail

    @property
    def bottom_marker(self) -> str:
        return self.bottom_corner + self.top_and_tail


class CommandConfig(BaseModel):
    """Defaults for the user-facing box commands."""

    fill_column: int = 70
    kill_ring_save_title: str = "example"
    file_title: Literal["name", "path"] = "name"
    shell_timeout: float = 30.0
    kill_ring_max: int = 60

    @field_validator("fill_column", "kill_ring_max")
    @classmethod
    def _positive(cls, value: int) -> int:
        if value < 1:
            msg = "must be at least 1"
            raise ValueError(msg)
        return value


class AppConfig(BaseModel):
    """Process-level runtime configuration."""

    log_dir: Path | None = None
    log_level: str = "WARNING"


# ---------------------------------------------------------------------------
# Root settings
# ---------------------------------------------------------------------------
class Settings(BaseSettings):
    """Settings with automatic .env loading and type validation.

    Environment variables use the ``BOXQUOTE_`` prefix and a double-underscore
    delimiter for nesting: ``BOXQUOTE_STYLE__SIDE``,
    ``BOXQUOTE_COMMANDS__FILL_COLUMN``, ``BOXQUOTE_APP__LOG_DIR``, etc.
    """

    model_config = SettingsConfigDict(
        env_prefix="BOXQUOTE_",
        env_file=".env",
        env_nested_delimiter="__",
        extra="ignore",
    )

    style: DecorationStyle = DecorationStyle()
    commands: CommandConfig = CommandConfig()
    app: AppConfig = AppConfig()


# ---------------------------------------------------------------------------
# Singleton access
# ---------------------------------------------------------------------------
@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings instance.

    Call ``get_settings.cache_clear()`` in tests to reset.
    """
    settings = Settings()

    env_file = settings.model_config.get("env_file")
    if env_file is not None and Path(str(env_file)).is_file():
        logger.info("Settings loaded .env from: %s", env_file)
    else:
        logger.debug("Settings: no .env file found, using env vars and defaults")

    return settings
