from __future__ import annotations

from datetime import date, datetime, time
from typing import Optional

from ..core.exceptions import NotFoundError
from ..events.repository import EventRepository, LeaveTypeRepository
from ..public_holidays.service import HolidayCalendar
from ..users.repository import ProfileRepository
from .model import LeaveBalance, LeaveUsage


class LeaveService:
    """Fractional leave accounting: each leave event costs `value` per business day."""

    def __init__(
        self,
        profiles: ProfileRepository,
        events: EventRepository,
        leave_types: LeaveTypeRepository,
        *,
        holiday_calendar: Optional[HolidayCalendar] = None,
    ):
        self._profiles = profiles
        self._events = events
        self._leave_types = leave_types
        self._holidays = holiday_calendar or HolidayCalendar()

    def balance(self, *, user_id: str, year: int) -> LeaveBalance:
        profile = self._profiles.get_by_id(user_id)
        if not profile:
            raise NotFoundError("프로필을 찾을 수 없습니다")

        values = {t.code: t.value for t in self._leave_types.list_active()}
        year_start = date(year, 1, 1)
        year_end = date(year, 12, 31)

        items: list[LeaveUsage] = []
        for e in self._events.list_holiday_events(
            user_id=user_id,
            start=datetime.combine(year_start, time.min),
            end=datetime.combine(year_end, time.max),
        ):
            start = max(e.start_date.date(), year_start)
            end = min(e.end_date.date(), year_end)
            items.append(
                LeaveUsage(
                    event_id=e.id,
                    label=e.title,
                    start=start,
                    end=end,
                    business_days=len(self._holidays.business_days(start, end)),
                    value=float(values.get(e.leave_type or "", 1.0)),
                )
            )

        granted = float(profile.annual_leave)
        used = round(sum(i.used for i in items), 2)
        return LeaveBalance(year=year, granted=granted, used=used, remaining=round(granted - used, 2), items=items)
