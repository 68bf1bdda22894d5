from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from typing import Optional, Sequence

from ..common.datetime_utils import parse_hh_mm
from ..common.validators import blank_to_none
from ..core.constants import CLOCK_IN_TITLE, CLOCK_OUT_TITLE
from ..core.enums import EventType, Visibility
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..public_holidays.service import HolidayCalendar
from ..users.repository import ProfileRepository
from .model import Event, EventDraft, EventValues, LeaveType
from .repository import EventRepository, LeaveTypeRepository

logger = logging.getLogger(__name__)

DEFAULT_START_TIME = time(9, 0)
DEFAULT_END_TIME = time(10, 0)
ALL_DAY_END_TIME = time(23, 59, 59)


@dataclass(frozen=True)
class AttendanceSummary:
    """All clock events of one day folded into a single calendar entry."""

    clock_in: Optional[Event]
    clock_out: Optional[Event]
    events: list[Event]

    def to_dict(self) -> dict:
        return {
            "clock_in": self.clock_in.start_date.strftime("%H:%M") if self.clock_in else None,
            "clock_out": self.clock_out.start_date.strftime("%H:%M") if self.clock_out else None,
            "events": [e.to_dict() for e in self.events],
        }


@dataclass(frozen=True)
class CalendarDay:
    date: date
    in_month: bool
    is_today: bool
    is_weekend: bool
    holiday_name: Optional[str]
    events: list[Event] = field(default_factory=list)
    attendance: Optional[AttendanceSummary] = None

    def to_dict(self) -> dict:
        return {
            "date": self.date.isoformat(),
            "in_month": self.in_month,
            "is_today": self.is_today,
            "is_weekend": self.is_weekend,
            "holiday_name": self.holiday_name,
            "events": [e.to_dict() for e in self.events],
            "attendance": self.attendance.to_dict() if self.attendance else None,
        }


def month_grid(year: int, month: int) -> tuple[date, date]:
    """First Sunday on/before the 1st and last Saturday on/after month end."""
    first = date(year, month, 1)
    next_first = date(year + 1, 1, 1) if month == 12 else date(year, month + 1, 1)
    last = next_first - timedelta(days=1)
    start = first - timedelta(days=(first.weekday() + 1) % 7)
    end = last + timedelta(days=(5 - last.weekday()) % 7)
    return start, end


def summarize_attendance(events: Sequence[Event]) -> Optional[AttendanceSummary]:
    if not events:
        return None
    clock_in = None
    clock_out = None
    for e in events:
        if e.title == CLOCK_IN_TITLE:
            clock_in = e
        elif e.title == CLOCK_OUT_TITLE:
            clock_out = e
    return AttendanceSummary(clock_in=clock_in, clock_out=clock_out, events=list(events))


class EventService:
    """Use cases: calendar events (create/edit/delete, month view, leave types)."""

    def __init__(
        self,
        events: EventRepository,
        leave_types: LeaveTypeRepository,
        profiles: ProfileRepository,
        *,
        holiday_calendar: Optional[HolidayCalendar] = None,
    ):
        self._events = events
        self._leave_types = leave_types
        self._profiles = profiles
        self._holidays = holiday_calendar or HolidayCalendar()

    def list_leave_types(self) -> Sequence[LeaveType]:
        return self._leave_types.list_active()

    def _get_owned(self, *, user_id: str, event_id: str) -> Event:
        event = self._events.get_by_id(event_id)
        if not event:
            raise NotFoundError("일정을 찾을 수 없습니다")
        if event.created_by != user_id:
            raise AuthorizationError("본인이 등록한 일정만 수정할 수 있습니다")
        return event

    def _resolve_leave_type(self, code: Optional[str]) -> LeaveType:
        types = list(self._leave_types.list_active())
        if not types:
            raise ValidationError("사용 가능한 휴가 종류가 없습니다")
        if not code:
            return types[0]
        for t in types:
            if t.code == str(code):
                return t
        raise ValidationError("휴가 종류가 올바르지 않습니다")

    def build_values(self, *, user_id: str, draft: EventDraft) -> EventValues:
        profile = self._profiles.get_by_id(user_id)
        if not profile:
            raise NotFoundError("프로필을 찾을 수 없습니다")

        event_type = EventType(draft.event_type)
        visibility = Visibility(draft.visibility)
        title = (draft.title or "").strip()
        if not title and event_type not in (EventType.HOLIDAY, EventType.ATTENDANCE):
            raise ValidationError("제목을 입력해주세요.")

        if not draft.start_date:
            raise ValidationError("시작 날짜를 입력해주세요.")
        start_day = draft.start_date
        end_day = draft.end_date or start_day

        is_all_day = bool(draft.is_all_day)
        exclude_lunch_time = draft.exclude_lunch_time
        description = blank_to_none(draft.description)
        leave_type = None

        if event_type == EventType.ATTENDANCE:
            visibility = Visibility.PERSONAL
            is_all_day = False
            exclude_lunch_time = True

        if is_all_day:
            start = datetime.combine(start_day, time.min)
            end = datetime.combine(end_day, ALL_DAY_END_TIME)
        else:
            start = datetime.combine(start_day, draft.start_time or DEFAULT_START_TIME)
            end = datetime.combine(end_day, draft.end_time or DEFAULT_END_TIME)
        if end < start:
            raise ValidationError("종료 시간이 시작 시간보다 빠를 수 없습니다.")

        if event_type == EventType.HOLIDAY:
            chosen = self._resolve_leave_type(draft.leave_type)
            leave_type = chosen.code
            title = chosen.label
            description = chosen.label

        company_id = None
        if visibility == Visibility.COMPANY:
            if not profile.company_id:
                raise ValidationError("회사에 소속되어야 회사 일정을 등록할 수 있습니다")
            company_id = profile.company_id

        return EventValues(
            title=title,
            description=description,
            start_date=start,
            end_date=end,
            location=blank_to_none(draft.location),
            department_id=draft.department_id,
            company_id=company_id,
            is_all_day=is_all_day,
            event_type=event_type,
            visibility=visibility,
            exclude_lunch_time=exclude_lunch_time,
            leave_type=leave_type,
        )

    def save_event(self, *, user_id: str, draft: EventDraft, event_id: Optional[str] = None) -> Event:
        if event_id:
            self._get_owned(user_id=user_id, event_id=event_id)
        values = self.build_values(user_id=user_id, draft=draft)
        if event_id:
            event = self._events.update_event(event_id, values=values)
            logger.info("event updated id=%s type=%s", event_id, values.event_type.value)
        else:
            event = self._events.create_event(created_by=user_id, values=values)
            logger.info("event created id=%s type=%s", event.id, values.event_type.value)
        return event

    def delete_event(self, *, user_id: str, event_id: str) -> None:
        self._get_owned(user_id=user_id, event_id=event_id)
        self._events.delete_event(event_id)
        logger.info("event deleted id=%s", event_id)

    def list_my_events(self, *, user_id: str) -> Sequence[Event]:
        return self._events.list_personal(user_id=user_id)

    def list_company_events(self, *, user_id: str) -> Sequence[Event]:
        profile = self._profiles.get_by_id(user_id)
        if not profile or not profile.company_id:
            return []
        return self._events.list_company(company_id=profile.company_id)

    def update_attendance_time(
        self,
        *,
        user_id: str,
        event_id: str,
        hh_mm: str,
        exclude_lunch_time: Optional[bool] = None,
    ) -> Event:
        event = self._get_owned(user_id=user_id, event_id=event_id)
        if event.event_type != EventType.ATTENDANCE:
            raise ValidationError("출퇴근 기록만 시간을 수정할 수 있습니다")
        try:
            new_time = parse_hh_mm(hh_mm or "")
        except ValueError:
            raise ValidationError("시간 형식이 올바르지 않습니다 (HH:MM)")

        start = datetime.combine(event.start_date.date(), new_time)
        values = EventValues(
            title=event.title,
            description=event.description,
            start_date=start,
            end_date=start + timedelta(minutes=1),
            location=event.location,
            department_id=event.department_id,
            company_id=event.company_id,
            is_all_day=False,
            event_type=event.event_type,
            visibility=event.visibility,
            exclude_lunch_time=event.exclude_lunch_time if exclude_lunch_time is None else bool(exclude_lunch_time),
            leave_type=event.leave_type,
        )
        return self._events.update_event(event_id, values=values)

    def month_view(
        self,
        *,
        user_id: str,
        year: int,
        month: int,
        today: date,
        show_personal: bool = True,
        show_company: bool = True,
    ) -> list[CalendarDay]:
        if month < 1 or month > 12:
            raise ValidationError("월 값이 올바르지 않습니다")
        profile = self._profiles.get_by_id(user_id)
        if not profile:
            raise NotFoundError("프로필을 찾을 수 없습니다")

        grid_start, grid_end = month_grid(year, month)
        events = [
            e
            for e in self._events.list_visible_between(
                user_id=user_id,
                company_id=profile.company_id,
                start=datetime.combine(grid_start, time.min),
                end=datetime.combine(grid_end, time.max),
            )
            if (show_personal or e.visibility != Visibility.PERSONAL)
            and (show_company or e.visibility != Visibility.COMPANY)
        ]

        days: list[CalendarDay] = []
        d = grid_start
        while d <= grid_end:
            todays = [e for e in events if e.covers(d)]
            holiday = self._holidays.holiday_info(d)
            days.append(
                CalendarDay(
                    date=d,
                    in_month=d.month == month,
                    is_today=d == today,
                    is_weekend=d.weekday() >= 5,
                    holiday_name=holiday.name if holiday else None,
                    events=[e for e in todays if e.event_type != EventType.ATTENDANCE],
                    attendance=summarize_attendance([e for e in todays if e.event_type == EventType.ATTENDANCE]),
                )
            )
            d += timedelta(days=1)
        return days
