"""Planning workflow orchestration: forecast -> context -> schedule -> metrics."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping, Optional, Sequence

from workforce.domain.context import (
    aggregate_coverage,
    create_scheduling_context,
    evaluate_compliance,
)
from workforce.domain.models import (
    ComplianceResult,
    DemandForecast,
    DemandSignal,
    LaborLawRule,
    ScheduleDraft,
    SchedulingConstraint,
    StaffProfile,
)
from workforce.services.forecasting_service import DemandForecastingService
from workforce.services.metrics_service import (
    MetricsRegistry,
    observe_fulfillment_rate,
    observe_schedule_accuracy,
)
from workforce.services.optimization_service import ScheduleOptimizationService
from workforce.utils.config import Settings, get_settings
from workforce.utils.logger import get_logger
from workforce.utils.rounding import round_half_up


logger = get_logger(__name__)


@dataclass(frozen=True)
class PlanningResult:
    forecast: DemandForecast
    draft: ScheduleDraft
    compliance: list[ComplianceResult]
    fulfillment_rate: float

    @property
    def coverage_score(self) -> float:
        return self.draft.metadata.coverage_score if self.draft.metadata else 0.0


def compute_fulfillment_rate(forecast: DemandForecast, draft: ScheduleDraft) -> float:
    """Share of forecast cells whose scheduled headcount meets demand, in percent."""
    coverage = aggregate_coverage(forecast, draft.assignments)
    demand_cells = [cell for cell in coverage.values() if cell.demand > 0]
    if not demand_cells:
        return 0.0
    met = sum(1 for cell in demand_cells if cell.scheduled >= cell.demand)
    return round_half_up(met / len(demand_cells) * 100)


class PlanningWorkflowService:
    """Runs one planning cycle and reports its quality to the metrics registry.

    The optimizer itself never sees the registry; only this workflow emits.
    """

    def __init__(
        self,
        forecasting_service: DemandForecastingService,
        optimization_service: ScheduleOptimizationService,
        metrics_registry: MetricsRegistry,
        *,
        settings: Optional[Settings] = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._forecasting_service = forecasting_service
        self._optimization_service = optimization_service
        self._metrics_registry = metrics_registry

    async def run_planning_cycle(
        self,
        signals: Sequence[DemandSignal],
        staff: Iterable[StaffProfile],
        *,
        drafts: Iterable[ScheduleDraft] = (),
        constraints: Iterable[SchedulingConstraint] = (),
        labor_rules: Iterable[LaborLawRule] = (),
        staff_usage_hints: Optional[Mapping[str, int]] = None,
    ) -> PlanningResult:
        forecast = await self._forecasting_service.generate_forecast(signals)
        context = create_scheduling_context(
            staff,
            forecast,
            constraints,
            drafts,
            labor_rules=labor_rules,
            staff_usage_hints=staff_usage_hints,
        )
        draft = await self._optimization_service.generate_schedule(context)
        compliance = evaluate_compliance(context)
        fulfillment_rate = compute_fulfillment_rate(forecast, draft)

        result = PlanningResult(
            forecast=forecast,
            draft=draft,
            compliance=compliance,
            fulfillment_rate=fulfillment_rate,
        )
        tags = {
            "scheduleId": draft.id,
            "generator": draft.metadata.generator if draft.metadata else self._optimization_service.name,
        }
        observe_schedule_accuracy(self._metrics_registry, result.coverage_score, tags)
        observe_fulfillment_rate(self._metrics_registry, fulfillment_rate, tags)

        failed = [item.constraint_id for item in compliance if not item.passed]
        if failed:
            logger.warning(
                "Planning cycle has failing constraints | draft_id=%s | constraints=%s",
                draft.id,
                failed,
            )
        logger.info(
            (
                "Planning cycle completed | draft_id=%s | forecast_model=%s | "
                "coverage_score=%.2f | fulfillment_rate=%.2f"
            ),
            draft.id,
            forecast.model,
            result.coverage_score,
            fulfillment_rate,
        )
        return result
