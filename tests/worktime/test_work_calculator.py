from __future__ import annotations

from datetime import date, datetime

import pytest

from src.groupware.groupware.worktime.calculator.standard_calculator import StandardWorkTimeCalculator
from src.groupware.groupware.worktime.service import week_range


@pytest.mark.parametrize(
    "clock_in,clock_out,exclude,expected",
    [
        (datetime(2025, 6, 11, 9, 0), datetime(2025, 6, 11, 18, 0), True, 480),
        (datetime(2025, 6, 11, 9, 0), datetime(2025, 6, 11, 18, 0), False, 540),
        (datetime(2025, 6, 11, 9, 0), datetime(2025, 6, 11, 9, 40), True, 0),
        (datetime(2025, 6, 11, 18, 0), datetime(2025, 6, 11, 9, 0), False, 0),
        (datetime(2025, 6, 11, 9, 0), None, True, 0),
    ],
)
def test_day_minutes(clock_in, clock_out, exclude, expected):
    assert StandardWorkTimeCalculator().day_minutes(clock_in, clock_out, exclude_lunch=exclude) == expected


def test_custom_lunch_length():
    calc = StandardWorkTimeCalculator(lunch_minutes=30)
    assert calc.day_minutes(datetime(2025, 6, 11, 9), datetime(2025, 6, 11, 12), exclude_lunch=True) == 150


@pytest.mark.parametrize(
    "today,start,end,expected",
    [
        # Wednesday, Mon-Fri
        (date(2025, 6, 11), "월", "금", (date(2025, 6, 9), date(2025, 6, 13))),
        # Sunday belongs to the week that started the Monday before
        (date(2025, 6, 15), "월", "금", (date(2025, 6, 9), date(2025, 6, 13))),
        # week starting Sunday
        (date(2025, 6, 11), "일", "토", (date(2025, 6, 8), date(2025, 6, 14))),
        # wrap-around week: Fri..Mon
        (date(2025, 6, 11), "금", "월", (date(2025, 6, 6), date(2025, 6, 9))),
        # unknown names fall back to Mon-Fri
        (date(2025, 6, 11), "x", None, (date(2025, 6, 9), date(2025, 6, 13))),
    ],
)
def test_week_range(today, start, end, expected):
    lo, hi = week_range(today, start, end)
    assert (lo.date(), hi.date()) == expected
    assert (lo.hour, lo.minute, lo.second) == (0, 0, 0)
    assert (hi.hour, hi.minute, hi.second) == (23, 59, 59)
