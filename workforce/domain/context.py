"""Scheduling context assembly and read-only helpers over it."""

from __future__ import annotations

from typing import Iterable, Mapping, Optional

from workforce.domain.models import (
    ComplianceResult,
    CoverageCell,
    DemandForecast,
    LaborLawRule,
    ScheduleDraft,
    SchedulingConstraint,
    SchedulingContext,
    ShiftAssignment,
    StaffProfile,
)


def create_scheduling_context(
    staff: Iterable[StaffProfile],
    demand_forecast: DemandForecast,
    constraints: Iterable[SchedulingConstraint] = (),
    drafts: Iterable[ScheduleDraft] = (),
    *,
    labor_rules: Iterable[LaborLawRule] = (),
    staff_usage_hints: Optional[Mapping[str, int]] = None,
) -> SchedulingContext:
    """Bundle the inputs of one optimization run.

    Inputs are copied so later changes to the caller's lists do not leak into
    a context that is already in use.
    """
    return SchedulingContext(
        staff=tuple(staff),
        demand_forecast=demand_forecast,
        constraints=tuple(constraints),
        drafts=tuple(drafts),
        labor_rules=tuple(labor_rules),
        staff_usage_hints=dict(staff_usage_hints) if staff_usage_hints is not None else None,
    )


def evaluate_compliance(context: SchedulingContext) -> list[ComplianceResult]:
    results: list[ComplianceResult] = []
    for constraint in context.constraints:
        passed = constraint.custom_rule(context) if constraint.custom_rule is not None else True
        results.append(
            ComplianceResult(
                constraint_id=constraint.id,
                passed=bool(passed),
                message=(
                    None
                    if passed
                    else f"Constraint {constraint.description} failed for current schedule context"
                ),
            )
        )
    return results


def group_assignments_by_date(
    assignments: Iterable[ShiftAssignment],
) -> dict[str, list[ShiftAssignment]]:
    """Bucket assignments per date, keeping first-seen date order and in-bucket order."""
    grouped: dict[str, list[ShiftAssignment]] = {}
    for assignment in assignments:
        grouped.setdefault(assignment.date, []).append(assignment)
    return grouped


def split_interval(interval: str) -> tuple[str, Optional[str]]:
    """Split ``"HH:MM-HH:MM"`` into start and end; end is None without a separator."""
    parts = interval.split("-", 1)
    if len(parts) < 2:
        return parts[0], None
    return parts[0], parts[1]


def coverage_key(date: str, interval: str) -> str:
    return f"{date}:{interval}"


def aggregate_coverage(
    forecast: DemandForecast,
    assignments: Iterable[ShiftAssignment],
) -> dict[str, CoverageCell]:
    """Demand vs scheduled headcount per ``date:interval`` cell.

    Assignments join a signal cell on date and start time; those without a
    matching signal get a zero-demand cell of their own.
    """
    demand_by_key: dict[str, float] = {}
    scheduled_by_key: dict[str, int] = {}
    key_by_start: dict[tuple[str, str], str] = {}
    for signal in forecast.signals:
        key = coverage_key(signal.date, signal.interval)
        demand_by_key[key] = signal.expected_demand
        scheduled_by_key[key] = 0
        key_by_start.setdefault((signal.date, split_interval(signal.interval)[0]), key)

    for assignment in assignments:
        key = key_by_start.get(
            (assignment.date, assignment.start_time),
            coverage_key(assignment.date, assignment.interval),
        )
        demand_by_key.setdefault(key, 0.0)
        scheduled_by_key[key] = scheduled_by_key.get(key, 0) + 1

    return {
        key: CoverageCell(demand=demand_by_key[key], scheduled=scheduled_by_key[key])
        for key in demand_by_key
    }
