from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional

from ..core.enums import EventType, Visibility


@dataclass(frozen=True)
class Event:
    """Domain entity: a calendar event (meetings, leave, clock-in/out, ...)."""

    id: str
    title: str
    description: Optional[str]
    start_date: datetime
    end_date: datetime
    location: Optional[str]
    created_by: str
    department_id: Optional[str]
    company_id: Optional[str]
    is_all_day: bool
    event_type: EventType
    visibility: Visibility
    exclude_lunch_time: Optional[bool] = None
    leave_type: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def covers(self, day: date) -> bool:
        return self.start_date.date() <= day <= self.end_date.date()

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "location": self.location,
            "created_by": self.created_by,
            "department_id": self.department_id,
            "company_id": self.company_id,
            "is_all_day": self.is_all_day,
            "event_type": self.event_type.value,
            "visibility": self.visibility.value,
            "exclude_lunch_time": self.exclude_lunch_time,
            "leave_type": self.leave_type,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }


@dataclass(frozen=True)
class EventValues:
    """Writable columns of an event, already normalized by the service."""

    title: str
    description: Optional[str]
    start_date: datetime
    end_date: datetime
    location: Optional[str]
    department_id: Optional[str]
    company_id: Optional[str]
    is_all_day: bool
    event_type: EventType
    visibility: Visibility
    exclude_lunch_time: Optional[bool] = None
    leave_type: Optional[str] = None


@dataclass(frozen=True)
class EventDraft:
    """Raw form input for creating or editing an event."""

    title: str = ""
    description: str = ""
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    location: str = ""
    is_all_day: bool = False
    event_type: EventType = EventType.OTHER
    visibility: Visibility = Visibility.PERSONAL
    leave_type: Optional[str] = None
    exclude_lunch_time: Optional[bool] = None
    department_id: Optional[str] = None


@dataclass(frozen=True)
class LeaveType:
    code: str
    label: str
    value: float

    def to_dict(self) -> dict:
        return {"code": self.code, "label": self.label, "value": self.value}
