from __future__ import annotations

from datetime import datetime
from typing import Optional

from ...core.constants import LUNCH_BREAK_MINUTES
from .base import WorkTimeCalculator


class StandardWorkTimeCalculator(WorkTimeCalculator):
    """Standard rule: (out - in), minus the lunch break when excluded, not below 0."""

    def __init__(self, lunch_minutes: int = LUNCH_BREAK_MINUTES):
        self._lunch_minutes = int(lunch_minutes)

    def day_minutes(self, clock_in: Optional[datetime], clock_out: Optional[datetime], *, exclude_lunch: bool) -> int:
        if not clock_in or not clock_out:
            return 0
        minutes = int((clock_out - clock_in).total_seconds() // 60)
        if minutes <= 0:
            return 0
        if exclude_lunch:
            minutes -= self._lunch_minutes
        return max(minutes, 0)
