"""Deterministic demo roster and demand for local runs."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Optional

from workforce.domain.models import DemandSignal, Qualification, StaffProfile


DEMO_INTERVALS = ("08:00-12:00", "12:00-16:00", "16:00-20:00")
DEMO_DAYS = 5
DEMO_LOCATION = "Main"


def demo_dates(start: Optional[date] = None, days: int = DEMO_DAYS) -> list[str]:
    first_day = start or date.today()
    return [(first_day + timedelta(days=offset)).isoformat() for offset in range(days)]


def build_demo_signals(start: Optional[date] = None) -> list[DemandSignal]:
    signals: list[DemandSignal] = []
    for day_offset, day in enumerate(demo_dates(start)):
        for index, interval in enumerate(DEMO_INTERVALS):
            signals.append(
                DemandSignal(
                    date=day,
                    interval=interval,
                    expected_demand=float(1 + index + day_offset % 2),
                    location=DEMO_LOCATION,
                )
            )
    return signals


def build_demo_staff(start: Optional[date] = None) -> list[StaffProfile]:
    days = demo_dates(start)
    all_day = frozenset(DEMO_INTERVALS)
    no_evenings = frozenset(DEMO_INTERVALS[:2])
    return [
        StaffProfile(
            id="staff-1",
            display_name="Rosa Jimenez",
            role="Barista",
            qualifications=(
                Qualification(id="espresso", name="Espresso Certified", level="associate"),
                Qualification(id="lead", name="Shift Lead", level="senior"),
            ),
            max_weekly_hours=40,
            preferred_hours=32,
            availability={day: all_day for day in days},
        ),
        StaffProfile(
            id="staff-2",
            display_name="Kofi Mensah",
            role="Barista",
            qualifications=(
                Qualification(id="espresso", name="Espresso Certified", level="associate"),
            ),
            max_weekly_hours=35,
            preferred_hours=30,
            availability={day: no_evenings for day in days},
        ),
        StaffProfile(
            id="staff-3",
            display_name="Amelia Chen",
            role="Manager",
            qualifications=(Qualification(id="lead", name="Shift Lead", level="manager"),),
            max_weekly_hours=45,
            preferred_hours=40,
            availability={day: all_day for day in days},
        ),
    ]
