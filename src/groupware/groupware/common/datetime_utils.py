from __future__ import annotations

from datetime import date, datetime, time


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_hh_mm(value: str) -> time:
    """Parse HH:MM (or HH:MM:SS) string into time."""
    value = value.strip()
    fmt = "%H:%M:%S" if value.count(":") == 2 else "%H:%M"
    return datetime.strptime(value, fmt).time()


def parse_iso_datetime(value: str) -> datetime:
    """Parse an ISO-8601 timestamp as sent by browsers.

    A trailing 'Z' is accepted and the result is returned as naive local time
    (tz info dropped after conversion) to match the DATETIME columns.
    """
    value = value.strip()
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def js_weekday(d: date) -> int:
    """Weekday index with Sunday = 0 (matches KOREAN_WEEKDAYS)."""
    return (d.weekday() + 1) % 7


def format_minutes_hhmm(minutes: int) -> str:
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def format_minutes_korean(minutes: int) -> str:
    return f"{minutes // 60}시간 {minutes % 60}분"
