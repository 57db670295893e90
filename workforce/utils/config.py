"""Runtime settings resolved from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional


def _env_int(name: str, default: int) -> int:
    raw_value = os.getenv(name)
    if raw_value is None or raw_value.strip() == "":
        return default
    try:
        return int(raw_value)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw_value!r}") from exc


def _env_optional_int(name: str) -> Optional[int]:
    raw_value = os.getenv(name)
    if raw_value is None or raw_value.strip() == "":
        return None
    try:
        return int(raw_value)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw_value!r}") from exc


@dataclass(frozen=True)
class Settings:
    app_name: str
    app_version: str
    log_level: str
    forecast_window_size: int
    forecast_model_version: str
    schedule_max_shifts_per_day: Optional[int]
    schedule_default_draft_name: str


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Build settings once per process; call ``get_settings.cache_clear()`` to reload."""
    return Settings(
        app_name=os.getenv("APP_NAME", "Workforce Scheduling Core"),
        app_version=os.getenv("APP_VERSION", "1.0.0"),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        forecast_window_size=_env_int("FORECAST_WINDOW_SIZE", 3),
        forecast_model_version=os.getenv("FORECAST_MODEL_VERSION", "1.0.0"),
        schedule_max_shifts_per_day=_env_optional_int("SCHEDULE_MAX_SHIFTS_PER_DAY"),
        schedule_default_draft_name=os.getenv(
            "SCHEDULE_DEFAULT_DRAFT_NAME",
            "Auto generated draft",
        ),
    )
