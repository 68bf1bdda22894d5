from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..events.model import Event


@dataclass(frozen=True)
class AttendanceRecord:
    id: str
    user_id: str
    company_id: str
    work_date: date
    clock_in_time: Optional[datetime]
    clock_out_time: Optional[datetime]
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "company_id": self.company_id,
            "date": self.work_date.isoformat(),
            "clock_in_time": self.clock_in_time.isoformat() if self.clock_in_time else None,
            "clock_out_time": self.clock_out_time.isoformat() if self.clock_out_time else None,
        }


@dataclass(frozen=True)
class ClockResult:
    record: Optional[AttendanceRecord]
    event: Event
    message: str
