from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import Optional, Union

from ..common.datetime_utils import parse_iso_datetime
from ..core.constants import (
    AUTO_CREATED_SUFFIX,
    CLOCK_EVENT_MINUTES,
    CLOCK_IN_DESCRIPTION,
    CLOCK_IN_TITLE,
    CLOCK_OUT_DESCRIPTION,
    CLOCK_OUT_TITLE,
)
from ..core.enums import ClockType, EventType, Visibility
from ..core.exceptions import NotFoundError, ValidationError
from ..events.model import Event, EventValues
from ..events.repository import EventRepository
from ..users.repository import ProfileRepository
from .model import AttendanceRecord, ClockResult
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

_MESSAGES = {
    ClockType.CLOCK_IN: "출근이 기록되었습니다",
    ClockType.CLOCK_OUT: "퇴근이 기록되었습니다",
}


def clock_event_values(
    clock_type: ClockType,
    *,
    at: datetime,
    duration: timedelta,
    description_suffix: str = "",
    department_id: Optional[str] = None,
) -> EventValues:
    is_in = clock_type == ClockType.CLOCK_IN
    return EventValues(
        title=CLOCK_IN_TITLE if is_in else CLOCK_OUT_TITLE,
        description=(CLOCK_IN_DESCRIPTION if is_in else CLOCK_OUT_DESCRIPTION) + description_suffix,
        start_date=at,
        end_date=at + duration,
        location=None,
        department_id=department_id,
        company_id=None,
        is_all_day=False,
        event_type=EventType.ATTENDANCE,
        visibility=Visibility.PERSONAL,
        exclude_lunch_time=True,
    )


class AttendanceService:
    """Use cases: clock in / clock out and the matching calendar entries."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        events: EventRepository,
        profiles: ProfileRepository,
    ):
        self._attendance = attendance
        self._events = events
        self._profiles = profiles

    def _company_of(self, user_id: str) -> str:
        profile = self._profiles.get_by_id(user_id)
        if not profile:
            raise NotFoundError("프로필을 찾을 수 없습니다")
        if not profile.company_id:
            raise ValidationError("회사에 소속되어야 출퇴근 기록을 사용할 수 있습니다")
        return profile.company_id

    def _upsert_calendar_event(self, *, user_id: str, clock_type: ClockType, at: datetime) -> Event:
        values = clock_event_values(
            clock_type,
            at=at,
            duration=timedelta(minutes=CLOCK_EVENT_MINUTES),
            description_suffix=AUTO_CREATED_SUFFIX,
        )
        existing = self._events.find_by_title_on_date(user_id=user_id, title=values.title, day=at.date())
        if existing:
            return self._events.update_event(existing.id, values=values)
        return self._events.create_event(created_by=user_id, values=values)

    def get_today(self, *, user_id: str, today: date) -> Optional[AttendanceRecord]:
        return self._attendance.get_for_user_and_date(user_id, today)

    def clock_in(self, *, user_id: str, now: datetime) -> ClockResult:
        company_id = self._company_of(user_id)
        today = now.date()

        existing = self._attendance.get_for_user_and_date(user_id, today)
        if existing and existing.clock_in_time:
            raise ValidationError("오늘은 이미 출근 기록이 있습니다")

        record = self._attendance.upsert_clock_in(
            user_id=user_id, company_id=company_id, work_date=today, clock_in_time=now
        )
        event = self._upsert_calendar_event(user_id=user_id, clock_type=ClockType.CLOCK_IN, at=now)
        logger.info("clock-in user_id=%s at=%s", user_id, now.isoformat())
        return ClockResult(record=record, event=event, message=_MESSAGES[ClockType.CLOCK_IN])

    def clock_out(self, *, user_id: str, now: datetime) -> ClockResult:
        self._company_of(user_id)
        today = now.date()

        existing = self._attendance.get_for_user_and_date(user_id, today)
        if not existing or not existing.clock_in_time:
            raise ValidationError("출근 기록이 없습니다")
        if existing.clock_out_time:
            raise ValidationError("오늘은 이미 퇴근 기록이 있습니다")

        record = self._attendance.set_clock_out(user_id=user_id, work_date=today, clock_out_time=now)
        event = self._upsert_calendar_event(user_id=user_id, clock_type=ClockType.CLOCK_OUT, at=now)
        logger.info("clock-out user_id=%s at=%s", user_id, now.isoformat())
        return ClockResult(record=record, event=event, message=_MESSAGES[ClockType.CLOCK_OUT])

    def record_clock_event(
        self,
        *,
        user_id: str,
        clock_type: Optional[str],
        timestamp: Union[str, datetime, None],
    ) -> ClockResult:
        """Insert a bare attendance event (no attendance row), stamped with the user's company."""
        if not clock_type or not timestamp:
            raise ValidationError("필수 데이터가 누락되었습니다")
        try:
            kind = ClockType(clock_type)
        except ValueError:
            raise ValidationError("출퇴근 유형이 올바르지 않습니다")
        if isinstance(timestamp, datetime):
            at = timestamp
        else:
            try:
                at = parse_iso_datetime(str(timestamp))
            except ValueError:
                raise ValidationError("시간 형식이 올바르지 않습니다")

        profile = self._profiles.get_by_id(user_id)
        if not profile:
            raise NotFoundError("프로필을 찾을 수 없습니다")

        values = clock_event_values(kind, at=at, duration=timedelta(0), department_id=profile.company_id)
        event = self._events.create_event(created_by=user_id, values=values)
        logger.info("%s recorded user_id=%s event_id=%s", kind.value, user_id, event.id)
        return ClockResult(record=None, event=event, message=_MESSAGES[kind])
