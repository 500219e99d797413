"""Runtime configuration for the navigator.

Only operational settings live here. Clinical constants come from the
packaged reference data and cannot be overridden from the environment.
"""
from __future__ import annotations

import logging
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def normalise_level(value: object) -> str:
    """Upper-case a level name and reject names the logging module does not know."""

    name = str(value or "INFO").strip().upper()
    if not isinstance(logging.getLevelName(name), int):
        raise ValueError(f"unknown log level: {value!r}")
    return name


class Settings(BaseSettings):
    """Settings backed by environment variables and an optional ``.env`` file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
        populate_by_name=True,
    )

    log_level: str = Field(default="INFO", alias="TBI_NAVIGATOR_LOG_LEVEL")
    log_format: str = Field(default=DEFAULT_LOG_FORMAT, alias="TBI_NAVIGATOR_LOG_FORMAT")

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalise_level(cls, value: object) -> str:
        return normalise_level(value)

    @property
    def log_level_number(self) -> int:
        return logging.getLevelName(self.log_level)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
