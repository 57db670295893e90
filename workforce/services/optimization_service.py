"""Greedy schedule generation against a demand forecast."""

from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Iterable, Optional, Protocol
from uuid import uuid4

from workforce.domain.constraints import OptimizationConfig
from workforce.domain.context import group_assignments_by_date, split_interval
from workforce.domain.models import (
    DRAFT_STATUS,
    DemandForecast,
    DemandSignal,
    ScheduleDraft,
    ScheduleMetadata,
    SchedulingContext,
    ShiftAssignment,
    StaffProfile,
)
from workforce.utils.config import Settings, get_settings
from workforce.utils.logger import get_logger
from workforce.utils.rounding import round_half_up


logger = get_logger(__name__)


class ScheduleOptimizationService(Protocol):
    name: str

    async def generate_schedule(self, context: SchedulingContext) -> ScheduleDraft:
        ...


def create_assignment(member: StaffProfile, signal: DemandSignal) -> ShiftAssignment:
    start_time, end_time = split_interval(signal.interval)
    if end_time is None:
        logger.warning(
            "Malformed interval token | staff_id=%s | date=%s | interval=%s",
            member.id,
            signal.date,
            signal.interval,
        )
    return ShiftAssignment(
        staff_id=member.id,
        role=member.role,
        date=signal.date,
        start_time=start_time,
        end_time=end_time,
        location=signal.location,
    )


def _count_scheduled(assignments: Iterable[ShiftAssignment], signal: DemandSignal) -> int:
    start_time, _ = split_interval(signal.interval)
    return sum(
        1
        for assignment in assignments
        if assignment.date == signal.date and assignment.start_time == start_time
    )


def calculate_coverage_score(
    forecast: DemandForecast,
    assignments: Iterable[ShiftAssignment],
) -> float:
    """Percentage of total demand met, crediting each signal at most its demand."""
    assignments = list(assignments)
    fulfilled = 0.0
    demand = 0.0
    for signal in forecast.signals:
        demand += signal.expected_demand
        fulfilled += min(_count_scheduled(assignments, signal), signal.expected_demand)
    return round_half_up(fulfilled / max(1.0, demand) * 100)


class GreedyScheduleOptimizationService:
    """Single-pass first-fit assignment, least-used staff first.

    Usage counts only cover assignments made in the current run; assignments
    inherited from a seed draft count as coverage but not as usage.
    """

    name = "greedy-coverage"

    def __init__(
        self,
        config: Optional[OptimizationConfig] = None,
        *,
        settings: Optional[Settings] = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._config = config or OptimizationConfig(
            max_shifts_per_day=self._settings.schedule_max_shifts_per_day,
        )

    @property
    def max_shifts_per_day(self) -> Optional[int]:
        return self._config.max_shifts_per_day

    async def generate_schedule(self, context: SchedulingContext) -> ScheduleDraft:
        seed_draft = next(
            (draft for draft in context.drafts if draft.status == DRAFT_STATUS),
            None,
        )
        assignments: list[ShiftAssignment] = list(seed_draft.assignments) if seed_draft else []
        staff_usage: dict[str, int] = {member.id: 0 for member in context.staff}
        # keyed on start time, the same match used for existing coverage
        booked_slots: set[tuple[str, str, str]] = {
            (assignment.staff_id, assignment.date, assignment.start_time)
            for assignment in assignments
        }
        cap = self.max_shifts_per_day
        created = 0

        for signal in context.demand_forecast.signals:
            required_headcount = math.ceil(signal.expected_demand)
            needed = max(0, required_headcount - _count_scheduled(assignments, signal))
            if needed == 0:
                continue

            # sorted() is stable, so equal usage keeps roster order
            available_staff = sorted(
                (member for member in context.staff if member.is_available(signal.date, signal.interval)),
                key=lambda member: staff_usage.get(member.id, 0),
            )

            assigned = 0
            for member in available_staff:
                if assigned >= needed:
                    break
                usage = staff_usage.get(member.id, 0)
                if cap is not None and usage >= cap:
                    continue
                slot = (member.id, signal.date, split_interval(signal.interval)[0])
                if slot in booked_slots:
                    continue

                assignments.append(create_assignment(member, signal))
                booked_slots.add(slot)
                staff_usage[member.id] = usage + 1
                assigned += 1
            created += assigned

        grouped = group_assignments_by_date(assignments)
        ordered = tuple(assignment for bucket in grouped.values() for assignment in bucket)
        coverage_score = calculate_coverage_score(context.demand_forecast, ordered)

        now = datetime.now(timezone.utc).isoformat()
        draft = ScheduleDraft(
            id=seed_draft.id if seed_draft else f"draft-{uuid4().hex}",
            name=seed_draft.name if seed_draft else self._settings.schedule_default_draft_name,
            status=DRAFT_STATUS,
            created_at=seed_draft.created_at if seed_draft else now,
            updated_at=now,
            assignments=ordered,
            metadata=ScheduleMetadata(generator=self.name, coverage_score=coverage_score),
        )
        logger.info(
            (
                "Schedule generated | draft_id=%s | seeded=%s | new_assignments=%s | "
                "total_assignments=%s | coverage_score=%.2f"
            ),
            draft.id,
            seed_draft is not None,
            created,
            len(ordered),
            coverage_score,
        )
        return draft
