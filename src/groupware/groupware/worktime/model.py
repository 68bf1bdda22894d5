from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional


@dataclass(frozen=True)
class DayWork:
    """One day's clock-in/clock-out pair taken from calendar events."""

    work_date: date
    clock_in: Optional[datetime]
    clock_out: Optional[datetime]
    exclude_lunch: bool = True

    @property
    def complete(self) -> bool:
        return self.clock_in is not None and self.clock_out is not None


@dataclass(frozen=True)
class WeeklySummary:
    week_start: datetime
    week_end: datetime
    weekly_work_hours: int
    total_minutes: int
    remaining_minutes: int
    weekday_holidays: int
    days: list[DayWork]
