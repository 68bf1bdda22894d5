from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, new_id, normalize_mysql_decimal
from .model import Profile
from .repository import ProfileRepository

_COLUMNS = """
    id, email, full_name, password_hash, company_id, is_admin,
    weekly_work_hours, weekly_work_start, weekly_work_end, annual_leave, created_at
"""


def _to_profile(row: dict) -> Profile:
    return Profile(
        id=row["id"],
        email=row["email"],
        full_name=row.get("full_name"),
        password_hash=row["password_hash"],
        company_id=row.get("company_id"),
        is_admin=bool(row.get("is_admin", False)),
        weekly_work_hours=int(row["weekly_work_hours"]),
        weekly_work_start=row["weekly_work_start"],
        weekly_work_end=row["weekly_work_end"],
        annual_leave=normalize_mysql_decimal(row.get("annual_leave")),
        created_at=row.get("created_at"),
    )


class MySQLProfileRepository(ProfileRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: str) -> Optional[Profile]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM profiles WHERE id=%s", (user_id,))
            row = fetchone(cur)
            return _to_profile(row) if row else None

    def get_by_email(self, email: str) -> Optional[Profile]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM profiles WHERE email=%s", (email,))
            row = fetchone(cur)
            return _to_profile(row) if row else None

    def create_profile(
        self,
        *,
        email: str,
        full_name: Optional[str],
        password_hash: str,
        company_id: Optional[str],
    ) -> str:
        profile_id = new_id()
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO profiles(id, email, full_name, password_hash, company_id)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (profile_id, email, full_name, password_hash, company_id),
            )
        return profile_id

    def update_password_hash(self, user_id: str, *, password_hash: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE profiles SET password_hash=%s WHERE id=%s", (password_hash, user_id))
            return cur.rowcount > 0

    def update_full_name(self, user_id: str, *, full_name: Optional[str]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE profiles SET full_name=%s WHERE id=%s", (full_name, user_id))
            return cur.rowcount > 0

    def update_work_settings(
        self,
        user_id: str,
        *,
        weekly_work_hours: int,
        weekly_work_start: str,
        weekly_work_end: str,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE profiles
                SET weekly_work_hours=%s, weekly_work_start=%s, weekly_work_end=%s
                WHERE id=%s
                """,
                (weekly_work_hours, weekly_work_start, weekly_work_end, user_id),
            )
            return cur.rowcount > 0

    def set_company(self, user_id: str, *, company_id: Optional[str]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE profiles SET company_id=%s WHERE id=%s", (company_id, user_id))
            return cur.rowcount > 0

    def list_by_company(self, company_id: str) -> Sequence[Profile]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM profiles WHERE company_id=%s ORDER BY email",
                (company_id,),
            )
            return [_to_profile(r) for r in fetchall(cur)]
