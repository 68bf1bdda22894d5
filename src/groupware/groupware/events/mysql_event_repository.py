from __future__ import annotations

from datetime import date, datetime, time
from typing import Optional, Sequence

from ..core.enums import EventType, Visibility
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, new_id, normalize_mysql_decimal
from .model import Event, EventValues, LeaveType
from .repository import EventRepository, LeaveTypeRepository

_COLUMNS = """
    id, title, description, start_date, end_date, location, created_by, department_id,
    company_id, is_all_day, event_type, visibility, exclude_lunch_time, leave_type,
    created_at, updated_at
"""


def _to_event(row: dict) -> Event:
    exclude = row.get("exclude_lunch_time")
    return Event(
        id=row["id"],
        title=row["title"],
        description=row.get("description"),
        start_date=row["start_date"],
        end_date=row["end_date"],
        location=row.get("location"),
        created_by=row["created_by"],
        department_id=row.get("department_id"),
        company_id=row.get("company_id"),
        is_all_day=bool(row.get("is_all_day")),
        event_type=EventType(row["event_type"]),
        visibility=Visibility(row["visibility"]),
        exclude_lunch_time=None if exclude is None else bool(exclude),
        leave_type=row.get("leave_type"),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )


def leave_code_text(value: float) -> str:
    """Render a leave value the way the calendar client prints numbers: 1, 0.5, 0.25."""
    return f"{value:g}"


def _to_leave_type(row: dict) -> LeaveType:
    # events.leave_type stores the value as text; the code column is only a fallback
    raw = row.get("value")
    if raw is None:
        return LeaveType(code=str(row["code"]), label=row["label"], value=0.0)
    value = normalize_mysql_decimal(raw)
    return LeaveType(code=leave_code_text(value), label=row["label"], value=value)


def _params(values: EventValues) -> tuple:
    return (
        values.title,
        values.description,
        values.start_date,
        values.end_date,
        values.location,
        values.department_id,
        values.company_id,
        int(values.is_all_day),
        values.event_type.value,
        values.visibility.value,
        None if values.exclude_lunch_time is None else int(values.exclude_lunch_time),
        values.leave_type,
    )


class MySQLEventRepository(EventRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _select_one(self, cur, event_id: str) -> Optional[Event]:
        cur.execute(f"SELECT {_COLUMNS} FROM events WHERE id=%s", (event_id,))
        row = fetchone(cur)
        return _to_event(row) if row else None

    def get_by_id(self, event_id: str) -> Optional[Event]:
        with db_cursor(self._conn_factory) as (_, cur):
            return self._select_one(cur, event_id)

    def create_event(self, *, created_by: str, values: EventValues) -> Event:
        event_id = new_id()
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO events(
                    id, created_by, title, description, start_date, end_date, location, department_id,
                    company_id, is_all_day, event_type, visibility, exclude_lunch_time, leave_type
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (event_id, created_by, *_params(values)),
            )
            return self._select_one(cur, event_id)

    def update_event(self, event_id: str, *, values: EventValues) -> Event:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE events
                SET title=%s, description=%s, start_date=%s, end_date=%s, location=%s, department_id=%s,
                    company_id=%s, is_all_day=%s, event_type=%s, visibility=%s, exclude_lunch_time=%s,
                    leave_type=%s
                WHERE id=%s
                """,
                (*_params(values), event_id),
            )
            return self._select_one(cur, event_id)

    def delete_event(self, event_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM events WHERE id=%s", (event_id,))
            return cur.rowcount > 0

    def list_personal(self, *, user_id: str) -> Sequence[Event]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM events
                WHERE created_by=%s AND visibility='personal'
                ORDER BY start_date
                """,
                (user_id,),
            )
            return [_to_event(r) for r in fetchall(cur)]

    def list_company(self, *, company_id: str) -> Sequence[Event]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM events
                WHERE company_id=%s AND visibility='company'
                ORDER BY start_date
                """,
                (company_id,),
            )
            return [_to_event(r) for r in fetchall(cur)]

    def list_visible_between(
        self, *, user_id: str, company_id: Optional[str], start: datetime, end: datetime
    ) -> Sequence[Event]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM events
                WHERE start_date <= %s AND end_date >= %s
                  AND (
                    (created_by=%s AND visibility='personal')
                    OR (visibility='company' AND company_id=%s)
                  )
                ORDER BY start_date
                """,
                (end, start, user_id, company_id),
            )
            return [_to_event(r) for r in fetchall(cur)]

    def list_by_titles_between(
        self, *, user_id: str, titles: Sequence[str], start: datetime, end: datetime
    ) -> Sequence[Event]:
        if not titles:
            return []
        placeholders = ",".join(["%s"] * len(titles))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM events
                WHERE created_by=%s AND title IN ({placeholders})
                  AND start_date BETWEEN %s AND %s
                ORDER BY start_date
                """,
                (user_id, *titles, start, end),
            )
            return [_to_event(r) for r in fetchall(cur)]

    def find_by_title_on_date(self, *, user_id: str, title: str, day: date) -> Optional[Event]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM events
                WHERE created_by=%s AND title=%s AND start_date BETWEEN %s AND %s
                ORDER BY start_date
                LIMIT 1
                """,
                (user_id, title, datetime.combine(day, time.min), datetime.combine(day, time.max)),
            )
            row = fetchone(cur)
            return _to_event(row) if row else None

    def list_holiday_events(self, *, user_id: str, start: datetime, end: datetime) -> Sequence[Event]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM events
                WHERE created_by=%s AND event_type='holiday'
                  AND start_date <= %s AND end_date >= %s
                ORDER BY start_date
                """,
                (user_id, end, start),
            )
            return [_to_event(r) for r in fetchall(cur)]


class MySQLLeaveTypeRepository(LeaveTypeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_active(self) -> Sequence[LeaveType]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT code, label, value
                FROM meta_codes
                WHERE code_type='leave_type' AND is_active=1
                ORDER BY value DESC
                """
            )
            return [_to_leave_type(r) for r in fetchall(cur)]
