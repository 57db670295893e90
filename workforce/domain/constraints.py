"""Configuration structs for the forecasting and optimization strategies.

Each struct enumerates the options its strategy recognises. Unknown fields and
out-of-range values are rejected with ``pydantic.ValidationError`` when the
struct is built.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ForecastingConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    window_size: int = Field(default=3, ge=1)


class ForecastOptions(BaseModel):
    """Per-call overrides accepted by ``generate_forecast``."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    window_size: Optional[int] = Field(default=None, ge=1)


class OptimizationConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    # None means unlimited shifts per staff member per run
    max_shifts_per_day: Optional[int] = Field(default=None, ge=1)
