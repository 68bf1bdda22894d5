from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, new_id, normalize_mysql_date
from .model import AttendanceRecord
from .repository import AttendanceRepository


def _to_record(row: dict) -> AttendanceRecord:
    return AttendanceRecord(
        id=row["id"],
        user_id=row["user_id"],
        company_id=row["company_id"],
        work_date=normalize_mysql_date(row["date"]),
        clock_in_time=row.get("clock_in_time"),
        clock_out_time=row.get("clock_out_time"),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _select(self, cur, user_id: str, work_date: date) -> Optional[AttendanceRecord]:
        cur.execute(
            """
            SELECT id, user_id, company_id, date, clock_in_time, clock_out_time, created_at, updated_at
            FROM attendance
            WHERE user_id=%s AND date=%s
            """,
            (user_id, work_date),
        )
        row = fetchone(cur)
        return _to_record(row) if row else None

    def get_for_user_and_date(self, user_id: str, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            return self._select(cur, user_id, work_date)

    def upsert_clock_in(
        self, *, user_id: str, company_id: str, work_date: date, clock_in_time: datetime
    ) -> AttendanceRecord:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance(id, user_id, company_id, date, clock_in_time)
                VALUES(%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE company_id=VALUES(company_id), clock_in_time=VALUES(clock_in_time)
                """,
                (new_id(), user_id, company_id, work_date, clock_in_time),
            )
            return self._select(cur, user_id, work_date)

    def set_clock_out(self, *, user_id: str, work_date: date, clock_out_time: datetime) -> AttendanceRecord:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE attendance SET clock_out_time=%s WHERE user_id=%s AND date=%s",
                (clock_out_time, user_id, work_date),
            )
            return self._select(cur, user_id, work_date)
