"""Composition root wiring forecasting, optimization and metrics together."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Optional

from workforce.data.demo import build_demo_signals, build_demo_staff
from workforce.domain.constraints import ForecastingConfig
from workforce.services.forecasting_service import (
    BaselineDemandForecastingService,
    CompositeForecastingService,
)
from workforce.services.metrics_service import (
    MetricsRegistry,
    log_metric_listener,
    register_metric_listener,
)
from workforce.services.optimization_service import GreedyScheduleOptimizationService
from workforce.services.planning_service import PlanningResult, PlanningWorkflowService
from workforce.utils.config import Settings, get_settings
from workforce.utils.logger import get_logger


logger = get_logger(__name__)


@dataclass(frozen=True)
class SchedulingEngine:
    settings: Settings
    metrics_registry: MetricsRegistry
    forecasting_service: CompositeForecastingService
    optimization_service: GreedyScheduleOptimizationService
    planning_service: PlanningWorkflowService


def create_engine(
    settings: Optional[Settings] = None,
    metrics_registry: Optional[MetricsRegistry] = None,
) -> SchedulingEngine:
    """Build every service once with explicit dependencies; nothing is global."""
    settings = settings or get_settings()
    metrics_registry = metrics_registry or MetricsRegistry()

    forecasting_service = CompositeForecastingService(
        [
            BaselineDemandForecastingService(ForecastingConfig(window_size=1), settings=settings),
            BaselineDemandForecastingService(
                ForecastingConfig(window_size=settings.forecast_window_size),
                settings=settings,
            ),
        ],
        settings=settings,
    )
    optimization_service = GreedyScheduleOptimizationService(settings=settings)
    planning_service = PlanningWorkflowService(
        forecasting_service,
        optimization_service,
        metrics_registry,
        settings=settings,
    )
    return SchedulingEngine(
        settings=settings,
        metrics_registry=metrics_registry,
        forecasting_service=forecasting_service,
        optimization_service=optimization_service,
        planning_service=planning_service,
    )


async def run_demo(engine: Optional[SchedulingEngine] = None) -> PlanningResult:
    engine = engine or create_engine()
    return await engine.planning_service.run_planning_cycle(
        build_demo_signals(),
        build_demo_staff(),
    )


def main() -> None:
    engine = create_engine()
    register_metric_listener(engine.metrics_registry, log_metric_listener)
    result = asyncio.run(run_demo(engine))
    logger.info(
        "%s %s demo finished | assignments=%s | coverage_score=%.2f",
        engine.settings.app_name,
        engine.settings.app_version,
        len(result.draft.assignments),
        result.coverage_score,
    )


if __name__ == "__main__":
    main()
