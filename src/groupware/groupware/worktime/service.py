from __future__ import annotations

import csv
import io
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Iterable, Optional

from ..common.datetime_utils import format_minutes_hhmm, format_minutes_korean, js_weekday
from ..core.constants import (
    CLOCK_IN_TITLE,
    CLOCK_OUT_TITLE,
    DEFAULT_WEEK_END,
    DEFAULT_WEEK_START,
    DEFAULT_WEEKLY_WORK_HOURS,
    KOREAN_WEEKDAYS,
)
from ..core.exceptions import NotFoundError, ValidationError
from ..events.model import Event
from ..events.repository import EventRepository
from ..public_holidays.service import HolidayCalendar
from ..users.repository import ProfileRepository
from .calculator.base import WorkTimeCalculator
from .calculator.standard_calculator import StandardWorkTimeCalculator
from .model import DayWork, WeeklySummary

REPORT_FIELDS = ["work_date", "clock_in", "clock_out", "lunch_excluded", "worked_hours"]


def _day_index(name: Optional[str], default: str) -> int:
    if name in KOREAN_WEEKDAYS:
        return KOREAN_WEEKDAYS.index(name)
    return KOREAN_WEEKDAYS.index(default)


def week_range(today: date, start_day: Optional[str], end_day: Optional[str]) -> tuple[datetime, datetime]:
    """Work week containing `today`, from the configured start day to end day."""
    start_idx = _day_index(start_day, DEFAULT_WEEK_START)
    end_idx = _day_index(end_day, DEFAULT_WEEK_END)

    start = today - timedelta(days=(js_weekday(today) + 7 - start_idx) % 7)
    end = start + timedelta(days=(end_idx - start_idx + 7) % 7)
    return datetime.combine(start, time.min), datetime.combine(end, time.max)


def aggregate_days(events: Iterable[Event]) -> list[DayWork]:
    """Group clock events by date; for each date the last clock-in/clock-out seen wins."""
    by_date: dict[date, dict] = {}
    for e in events:
        if e.title not in (CLOCK_IN_TITLE, CLOCK_OUT_TITLE):
            continue
        slot = by_date.setdefault(e.start_date.date(), {"in": None, "out": None})
        if e.title == CLOCK_IN_TITLE:
            slot["in"] = e
        else:
            slot["out"] = e

    days = []
    for d in sorted(by_date):
        ev_in = by_date[d]["in"]
        ev_out = by_date[d]["out"]
        exclude = True
        if ev_in is not None and ev_in.exclude_lunch_time is not None:
            exclude = bool(ev_in.exclude_lunch_time)
        days.append(
            DayWork(
                work_date=d,
                clock_in=ev_in.start_date if ev_in else None,
                clock_out=ev_out.start_date if ev_out else None,
                exclude_lunch=exclude,
            )
        )
    return days


def total_worked_minutes(days: Iterable[DayWork], calculator: WorkTimeCalculator) -> int:
    return sum(
        calculator.day_minutes(d.clock_in, d.clock_out, exclude_lunch=d.exclude_lunch) for d in days if d.complete
    )


class WorkSummaryService:
    """Weekly worked vs. required hours for the sidebar widget."""

    def __init__(
        self,
        profiles: ProfileRepository,
        events: EventRepository,
        *,
        holiday_calendar: Optional[HolidayCalendar] = None,
        calculator: Optional[WorkTimeCalculator] = None,
    ):
        self._profiles = profiles
        self._events = events
        self._holidays = holiday_calendar or HolidayCalendar()
        self._calculator = calculator or StandardWorkTimeCalculator()

    def weekly_summary(self, *, user_id: str, today: date) -> WeeklySummary:
        profile = self._profiles.get_by_id(user_id)
        if not profile:
            raise NotFoundError("프로필을 찾을 수 없습니다")

        hours = int(profile.weekly_work_hours or DEFAULT_WEEKLY_WORK_HOURS)
        start, end = week_range(today, profile.weekly_work_start, profile.weekly_work_end)

        events = self._events.list_by_titles_between(
            user_id=user_id, titles=[CLOCK_IN_TITLE, CLOCK_OUT_TITLE], start=start, end=end
        )
        days = aggregate_days(events)
        total = total_worked_minutes(days, self._calculator)

        return WeeklySummary(
            week_start=start,
            week_end=end,
            weekly_work_hours=hours,
            total_minutes=total,
            remaining_minutes=max(hours * 60 - total, 0),
            weekday_holidays=self._holidays.weekday_holiday_count(start.date(), end.date()),
            days=days,
        )

    @staticmethod
    def to_dict(summary: WeeklySummary) -> dict:
        return {
            "week_start": summary.week_start.date().isoformat(),
            "week_end": summary.week_end.date().isoformat(),
            "weekly_work_hours": summary.weekly_work_hours,
            "total_minutes": summary.total_minutes,
            "remaining_minutes": summary.remaining_minutes,
            "total_text": format_minutes_korean(summary.total_minutes),
            "remaining_text": format_minutes_korean(summary.remaining_minutes),
            "weekday_holidays": summary.weekday_holidays,
        }


@dataclass(frozen=True)
class ReportData:
    rows: list[dict]
    summary: dict


class WorkReportService:
    def __init__(self, events: EventRepository, *, calculator: Optional[WorkTimeCalculator] = None):
        self._events = events
        self._calculator = calculator or StandardWorkTimeCalculator()

    def build_report(self, *, user_id: str, start: date, end: date) -> ReportData:
        if end < start:
            raise ValidationError("종료일이 시작일보다 빠를 수 없습니다")

        events = self._events.list_by_titles_between(
            user_id=user_id,
            titles=[CLOCK_IN_TITLE, CLOCK_OUT_TITLE],
            start=datetime.combine(start, time.min),
            end=datetime.combine(end, time.max),
        )

        rows: list[dict] = []
        total = 0
        for d in aggregate_days(events):
            minutes = self._calculator.day_minutes(d.clock_in, d.clock_out, exclude_lunch=d.exclude_lunch)
            total += minutes
            rows.append(
                {
                    "work_date": d.work_date.strftime("%Y-%m-%d"),
                    "clock_in": d.clock_in.strftime("%H:%M") if d.clock_in else "-",
                    "clock_out": d.clock_out.strftime("%H:%M") if d.clock_out else "-",
                    "lunch_excluded": "Y" if d.exclude_lunch else "N",
                    "worked_hours": format_minutes_hhmm(minutes),
                }
            )

        summary = {
            "start": start.strftime("%Y-%m-%d"),
            "end": end.strftime("%Y-%m-%d"),
            "days": len(rows),
            "total_minutes": total,
            "total_hours": format_minutes_hhmm(total),
        }
        return ReportData(rows=rows, summary=summary)

    @staticmethod
    def to_csv_bytes(data: ReportData) -> bytes:
        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=REPORT_FIELDS)
        writer.writeheader()
        for row in data.rows:
            writer.writerow(row)
        return out.getvalue().encode("utf-8-sig")
