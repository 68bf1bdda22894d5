from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from .model import Event, EventValues, LeaveType


class EventRepository(Protocol):
    def get_by_id(self, event_id: str) -> Optional[Event]:
        raise NotImplementedError

    def create_event(self, *, created_by: str, values: EventValues) -> Event:
        raise NotImplementedError

    def update_event(self, event_id: str, *, values: EventValues) -> Event:
        raise NotImplementedError

    def delete_event(self, event_id: str) -> bool:
        raise NotImplementedError

    def list_personal(self, *, user_id: str) -> Sequence[Event]:
        """Personal events created by the user, ordered by start."""
        raise NotImplementedError

    def list_company(self, *, company_id: str) -> Sequence[Event]:
        raise NotImplementedError

    def list_visible_between(
        self, *, user_id: str, company_id: Optional[str], start: datetime, end: datetime
    ) -> Sequence[Event]:
        """Own personal events and company events overlapping [start, end]."""
        raise NotImplementedError

    def list_by_titles_between(
        self, *, user_id: str, titles: Sequence[str], start: datetime, end: datetime
    ) -> Sequence[Event]:
        """The user's events with one of the titles starting in [start, end], ordered by start."""
        raise NotImplementedError

    def find_by_title_on_date(self, *, user_id: str, title: str, day: date) -> Optional[Event]:
        raise NotImplementedError

    def list_holiday_events(self, *, user_id: str, start: datetime, end: datetime) -> Sequence[Event]:
        raise NotImplementedError


class LeaveTypeRepository(Protocol):
    def list_active(self) -> Sequence[LeaveType]:
        """Active leave types ordered by value, largest first."""
        raise NotImplementedError
