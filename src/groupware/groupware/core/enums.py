from __future__ import annotations

from enum import Enum


class EventType(str, Enum):
    """Loại sự kiện trên lịch."""

    MEETING = "meeting"
    DEADLINE = "deadline"
    HOLIDAY = "holiday"
    ATTENDANCE = "attendance"
    OTHER = "other"


class Visibility(str, Enum):
    """Phạm vi hiển thị: chỉ mình tôi hoặc cả công ty."""

    PERSONAL = "personal"
    COMPANY = "company"


class ClockType(str, Enum):
    CLOCK_IN = "clock_in"
    CLOCK_OUT = "clock_out"


class TransactionType(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"
