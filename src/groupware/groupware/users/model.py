from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.constants import (
    DEFAULT_ANNUAL_LEAVE,
    DEFAULT_WEEK_END,
    DEFAULT_WEEK_START,
    DEFAULT_WEEKLY_WORK_HOURS,
)


@dataclass(frozen=True)
class Profile:
    """Domain entity: a user profile (account + work settings).

    Note: plain data object, no DB access here.
    """

    id: str
    email: str
    full_name: Optional[str]
    password_hash: str
    company_id: Optional[str] = None
    is_admin: bool = False
    weekly_work_hours: int = DEFAULT_WEEKLY_WORK_HOURS
    weekly_work_start: str = DEFAULT_WEEK_START
    weekly_work_end: str = DEFAULT_WEEK_END
    annual_leave: float = DEFAULT_ANNUAL_LEAVE
    created_at: Optional[datetime] = None

    @property
    def display_name(self) -> str:
        return self.full_name or self.email

    def to_public_dict(self) -> dict:
        return {
            "id": self.id,
            "email": self.email,
            "full_name": self.full_name,
            "company_id": self.company_id,
            "is_admin": self.is_admin,
            "weekly_work_hours": self.weekly_work_hours,
            "weekly_work_start": self.weekly_work_start,
            "weekly_work_end": self.weekly_work_end,
            "annual_leave": self.annual_leave,
        }


@dataclass(frozen=True)
class WorkSettings:
    weekly_work_hours: int
    weekly_work_start: str
    weekly_work_end: str
