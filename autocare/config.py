"""Application configuration loaded from config.yaml + environment variables."""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings

_CONFIG_PATH = Path(__file__).resolve().parent.parent / "config.yaml"


def _load_yaml() -> dict:
    if _CONFIG_PATH.exists():
        with open(_CONFIG_PATH) as f:
            return yaml.safe_load(f) or {}
    return {}


class BookingConfig(BaseSettings):
    opening_hour: int = 9
    closing_hour: int = 17  # exclusive
    min_vehicle_year: int = 1900


class AuthConfig(BaseSettings):
    cookie_name: str = "session_token"
    session_max_age_days: int = 7


class Settings(BaseSettings):
    database_url: str = "sqlite+aiosqlite:///data/autocare.db"
    log_level: str = "INFO"
    booking: BookingConfig = Field(default_factory=BookingConfig)
    auth: AuthConfig = Field(default_factory=AuthConfig)

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "env_prefix": "AUTOCARE_"}


@lru_cache
def get_settings() -> Settings:
    """Build Settings by merging YAML defaults with env overrides."""
    y = _load_yaml()
    overrides = {}
    # AUTOCARE_* environment variables win over config.yaml.
    if "url" in (y.get("database") or {}) and "AUTOCARE_DATABASE_URL" not in os.environ:
        overrides["database_url"] = y["database"]["url"]
    if "log_level" in y and "AUTOCARE_LOG_LEVEL" not in os.environ:
        overrides["log_level"] = y["log_level"]
    return Settings(
        booking=BookingConfig(**y.get("booking", {})),
        auth=AuthConfig(**y.get("auth", {})),
        **overrides,
    )
