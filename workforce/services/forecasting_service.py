"""Demand forecasting strategies: moving-average baseline and ensemble composite."""

from __future__ import annotations

import asyncio
from dataclasses import replace
from datetime import datetime, timezone
from typing import Callable, Iterable, Optional, Protocol, Sequence

import numpy as np
import pandas as pd

from workforce.domain.constraints import ForecastingConfig, ForecastOptions
from workforce.domain.models import (
    BackcastObservation,
    BackcastSummary,
    DemandForecast,
    DemandSignal,
)
from workforce.utils.config import Settings, get_settings
from workforce.utils.logger import get_logger
from workforce.utils.rounding import round_half_up


logger = get_logger(__name__)

ForecastingListener = Callable[[DemandForecast], None]


class DemandForecastingService(Protocol):
    name: str

    async def generate_forecast(
        self,
        signals: Sequence[DemandSignal],
        options: Optional[ForecastOptions] = None,
    ) -> DemandForecast:
        ...


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


def smooth_demand(signals: Sequence[DemandSignal], window_size: int) -> list[DemandSignal]:
    """Trailing moving average over the date-sorted sequence.

    The window is positional across every signal, not per location or
    interval, so interleaved series are averaged together.
    """
    if not signals:
        return []

    # sorted() is stable: signals sharing a date keep their input order
    ordered = sorted(signals, key=lambda signal: signal.date)
    demand = pd.Series([signal.expected_demand for signal in ordered], dtype="float64")
    smoothed = demand.rolling(window=window_size, min_periods=1).mean()
    return [
        replace(signal, expected_demand=round_half_up(value))
        for signal, value in zip(ordered, smoothed)
    ]


class BaselineDemandForecastingService:
    """Moving-average smoothing of raw demand signals."""

    name = "baseline-moving-average"

    def __init__(
        self,
        config: Optional[ForecastingConfig] = None,
        *,
        listeners: Optional[Iterable[ForecastingListener]] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._config = config or ForecastingConfig(window_size=self._settings.forecast_window_size)
        self._listeners: list[ForecastingListener] = list(listeners or [])

    @property
    def window_size(self) -> int:
        return self._config.window_size

    async def generate_forecast(
        self,
        signals: Sequence[DemandSignal],
        options: Optional[ForecastOptions] = None,
    ) -> DemandForecast:
        window_size = self.window_size
        if options is not None and options.window_size is not None:
            window_size = options.window_size

        forecast = DemandForecast(
            generated_at=_utc_now(),
            model=self.name,
            version=self._settings.forecast_model_version,
            signals=tuple(smooth_demand(signals, window_size)),
        )
        logger.info(
            "Forecast generated | model=%s | window_size=%s | signals=%s",
            self.name,
            window_size,
            len(forecast.signals),
        )

        for listener in self._listeners:
            listener(forecast)
        return forecast


class CompositeForecastingService:
    """Averages the output of several forecasting strategies.

    Any object with ``generate_forecast`` can be composed, including another
    composite. Cycles are not detected.
    """

    name = "composite-ensemble"

    def __init__(
        self,
        services: Iterable[DemandForecastingService],
        *,
        settings: Optional[Settings] = None,
    ) -> None:
        self._services: tuple[DemandForecastingService, ...] = tuple(services)
        if not self._services:
            raise ValueError("CompositeForecastingService requires at least one service")
        self._settings = settings or get_settings()

    async def generate_forecast(
        self,
        signals: Sequence[DemandSignal],
        options: Optional[ForecastOptions] = None,
    ) -> DemandForecast:
        # gather propagates the first sub-strategy failure unchanged
        forecasts = await asyncio.gather(
            *(service.generate_forecast(signals, options) for service in self._services)
        )

        lookups: list[dict[tuple[str, str], float]] = []
        for forecast in forecasts:
            lookup: dict[tuple[str, str], float] = {}
            for entry in forecast.signals:
                lookup.setdefault((entry.date, entry.interval), entry.expected_demand)
            lookups.append(lookup)

        combined: list[DemandSignal] = []
        for signal in signals:
            key = (signal.date, signal.interval)
            values = [lookup.get(key, signal.expected_demand) for lookup in lookups]
            combined.append(
                replace(signal, expected_demand=round_half_up(float(np.mean(values))))
            )

        logger.info(
            "Composite forecast generated | members=%s | signals=%s",
            ",".join(service.name for service in self._services),
            len(combined),
        )
        return DemandForecast(
            generated_at=_utc_now(),
            model=self.name,
            version=self._settings.forecast_model_version,
            signals=tuple(combined),
        )


def evaluate_backcast(observations: Sequence[BackcastObservation]) -> BackcastSummary:
    """Score past forecasts against actuals.

    MAPE skips zero actuals in the numerator but still divides by the full
    observation count. Volatility is the sample variance of the deltas.
    """
    if not observations:
        return BackcastSummary(mape=0.0, bias=0.0, volatility=0.0)

    actual = np.array([observation.actual for observation in observations], dtype=float)
    forecasted = np.array([observation.forecasted for observation in observations], dtype=float)
    deltas = forecasted - actual

    nonzero = actual != 0
    percentage_errors = np.abs(deltas[nonzero] / actual[nonzero])
    mape = float(percentage_errors.sum() / len(observations) * 100)
    bias = float(deltas.mean())
    volatility = float(np.var(deltas, ddof=1)) if len(deltas) > 1 else 0.0

    return BackcastSummary(
        mape=round_half_up(mape),
        bias=round_half_up(bias),
        volatility=round_half_up(volatility),
    )
