"""Tests for strategy configuration structs and environment settings."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from workforce.domain.constraints import ForecastingConfig, ForecastOptions, OptimizationConfig
from workforce.utils.config import get_settings


# --- ForecastingConfig ---

def test_forecasting_config_defaults_to_window_three() -> None:
    assert ForecastingConfig().window_size == 3


def test_forecasting_window_zero_raises() -> None:
    with pytest.raises(ValidationError):
        ForecastingConfig(window_size=0)


def test_forecasting_window_one_passes() -> None:
    """Exact lower boundary must pass."""
    assert ForecastingConfig(window_size=1).window_size == 1


def test_forecasting_unknown_field_raises() -> None:
    with pytest.raises(ValidationError):
        ForecastingConfig.model_validate({"window_size": 2, "smoothing": "ewm"})


def test_forecasting_config_is_frozen() -> None:
    config = ForecastingConfig(window_size=2)
    with pytest.raises(ValidationError):
        config.window_size = 4


def test_forecast_options_reject_negative_window() -> None:
    with pytest.raises(ValidationError):
        ForecastOptions(window_size=-1)


# --- OptimizationConfig ---

def test_optimization_cap_defaults_to_unlimited() -> None:
    assert OptimizationConfig().max_shifts_per_day is None


def test_optimization_cap_zero_raises() -> None:
    with pytest.raises(ValidationError):
        OptimizationConfig(max_shifts_per_day=0)


def test_optimization_unknown_field_raises() -> None:
    with pytest.raises(ValidationError):
        OptimizationConfig.model_validate({"max_shifts_per_day": 1, "max_hours": 8})


# --- Settings ---

def test_settings_read_environment(monkeypatch) -> None:
    monkeypatch.setenv("FORECAST_WINDOW_SIZE", "5")
    monkeypatch.setenv("SCHEDULE_MAX_SHIFTS_PER_DAY", "2")
    get_settings.cache_clear()
    try:
        settings = get_settings()
        assert settings.forecast_window_size == 5
        assert settings.schedule_max_shifts_per_day == 2
    finally:
        get_settings.cache_clear()


def test_settings_blank_cap_means_unlimited(monkeypatch) -> None:
    monkeypatch.setenv("SCHEDULE_MAX_SHIFTS_PER_DAY", "")
    get_settings.cache_clear()
    try:
        assert get_settings().schedule_max_shifts_per_day is None
    finally:
        get_settings.cache_clear()


def test_settings_invalid_integer_raises(monkeypatch) -> None:
    monkeypatch.setenv("FORECAST_WINDOW_SIZE", "three")
    get_settings.cache_clear()
    try:
        with pytest.raises(ValueError):
            get_settings()
    finally:
        get_settings.cache_clear()
