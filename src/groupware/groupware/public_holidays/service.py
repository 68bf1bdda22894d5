from __future__ import annotations

from datetime import date, timedelta
from typing import Optional

import holidays as holidays_lib

from ..common.datetime_utils import parse_iso_date
from .model import Holiday


class HolidayCalendar:
    """Public holiday lookups for one country (Korea by default).

    Each year's table is built once by the `holidays` package and cached.
    """

    def __init__(self, country: str = "KR", *, language: Optional[str] = "ko"):
        self._country = country
        self._language = language
        self._years: dict[int, dict[date, str]] = {}

    def _table(self, year: int) -> dict[date, str]:
        table = self._years.get(year)
        if table is None:
            kwargs = {"years": year}
            if self._language:
                kwargs["language"] = self._language
            table = dict(holidays_lib.country_holidays(self._country, **kwargs))
            self._years[year] = table
        return table

    def get_holidays(self, year: int) -> list[Holiday]:
        return [Holiday(date=d, name=name) for d, name in sorted(self._table(year).items())]

    def holiday_info(self, d: date) -> Optional[Holiday]:
        name = self._table(d.year).get(d)
        return Holiday(date=d, name=name) if name else None

    def is_holiday(self, d: date) -> bool:
        return d in self._table(d.year)

    def is_holiday_by_date_string(self, value: str) -> bool:
        return self.is_holiday(parse_iso_date(value))

    def holidays_in_range(self, start: date, end: date) -> list[Holiday]:
        out: list[Holiday] = []
        for year in range(start.year, end.year + 1):
            out.extend(h for h in self.get_holidays(year) if start <= h.date <= end)
        return out

    def weekday_holiday_count(self, start: date, end: date) -> int:
        """Holidays falling on Mon-Fri between start and end (inclusive)."""
        return sum(1 for h in self.holidays_in_range(start, end) if h.date.weekday() < 5)

    def business_days(self, start: date, end: date) -> list[date]:
        """Mon-Fri days in [start, end] that are not public holidays."""
        days = []
        d = start
        while d <= end:
            if d.weekday() < 5 and not self.is_holiday(d):
                days.append(d)
            d += timedelta(days=1)
        return days
