from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_for_user_and_date(self, user_id: str, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def upsert_clock_in(
        self, *, user_id: str, company_id: str, work_date: date, clock_in_time: datetime
    ) -> AttendanceRecord:
        raise NotImplementedError

    def set_clock_out(self, *, user_id: str, work_date: date, clock_out_time: datetime) -> AttendanceRecord:
        raise NotImplementedError
