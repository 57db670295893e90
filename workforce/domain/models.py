"""Domain models for demand forecasting and schedule generation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Literal, Optional


DraftStatus = Literal["draft", "published", "archived"]
QualificationLevel = Literal["trainee", "associate", "senior", "manager"]
ConstraintSeverity = Literal["info", "warning", "critical"]

DRAFT_STATUS: DraftStatus = "draft"


@dataclass(frozen=True)
class DemandSignal:
    date: str
    interval: str
    expected_demand: float
    location: str
    segment: Optional[str] = None


@dataclass(frozen=True)
class DemandForecast:
    generated_at: str
    model: str
    version: str
    signals: tuple[DemandSignal, ...] = ()


@dataclass(frozen=True)
class Qualification:
    id: str
    name: str
    level: QualificationLevel
    expires_on: Optional[str] = None


@dataclass(frozen=True)
class StaffProfile:
    id: str
    display_name: str
    role: str
    qualifications: tuple[Qualification, ...] = ()
    max_weekly_hours: float = 0.0
    preferred_hours: float = 0.0
    # date -> interval tokens the member may be assigned to
    availability: dict[str, frozenset[str]] = field(default_factory=dict)

    def is_available(self, date: str, interval: str) -> bool:
        return interval in self.availability.get(date, ())


@dataclass(frozen=True)
class LaborLawRule:
    id: str
    description: str
    applies_to_roles: tuple[str, ...] = ()
    max_hours_per_day: Optional[float] = None
    max_consecutive_days: Optional[int] = None
    min_rest_period_hours: Optional[float] = None
    requires_qualification_ids: tuple[str, ...] = ()


@dataclass(frozen=True)
class ShiftAssignment:
    staff_id: str
    role: str
    date: str
    start_time: str
    end_time: Optional[str]
    location: str
    notes: Optional[str] = None

    @property
    def interval(self) -> str:
        return f"{self.start_time}-{self.end_time}"


@dataclass(frozen=True)
class ScheduleMetadata:
    generator: str
    coverage_score: float


@dataclass(frozen=True)
class ScheduleDraft:
    id: str
    name: str
    status: DraftStatus
    created_at: str
    updated_at: str
    assignments: tuple[ShiftAssignment, ...] = ()
    metadata: Optional[ScheduleMetadata] = None


@dataclass(frozen=True)
class SchedulingConstraint:
    """Opaque rule carried through the context.

    The greedy pass never reads it; ``custom_rule`` is only evaluated by
    ``evaluate_compliance``.
    """

    id: str
    description: str
    severity: ConstraintSeverity = "info"
    law_rule_id: Optional[str] = None
    custom_rule: Optional[Callable[["SchedulingContext"], bool]] = None


@dataclass(frozen=True)
class SchedulingContext:
    staff: tuple[StaffProfile, ...]
    demand_forecast: DemandForecast
    constraints: tuple[SchedulingConstraint, ...] = ()
    drafts: tuple[ScheduleDraft, ...] = ()
    labor_rules: tuple[LaborLawRule, ...] = ()
    staff_usage_hints: Optional[dict[str, int]] = None


@dataclass(frozen=True)
class ComplianceResult:
    constraint_id: str
    passed: bool
    message: Optional[str] = None


@dataclass(frozen=True)
class CoverageCell:
    demand: float
    scheduled: int


@dataclass(frozen=True)
class MetricEvent:
    name: str
    value: float
    timestamp: str
    tags: Optional[dict[str, str]] = None


@dataclass(frozen=True)
class BackcastObservation:
    timestamp: str
    actual: float
    forecasted: float


@dataclass(frozen=True)
class BackcastSummary:
    mape: float
    bias: float
    volatility: float
