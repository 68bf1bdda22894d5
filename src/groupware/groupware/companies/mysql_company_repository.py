from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, new_id
from .model import Company
from .repository import CompanyRepository


def _to_company(row: dict) -> Company:
    return Company(
        id=row["id"],
        name=row["name"],
        description=row.get("description"),
        accept_code=row["accept_code"],
        admin_id=row.get("admin_id"),
        created_at=row.get("created_at"),
    )


class MySQLCompanyRepository(CompanyRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, company_id: str) -> Optional[Company]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT id, name, description, accept_code, admin_id, created_at FROM companies WHERE id=%s",
                (company_id,),
            )
            row = fetchone(cur)
            return _to_company(row) if row else None

    def get_by_accept_code(self, accept_code: str) -> Optional[Company]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT id, name, description, accept_code, admin_id, created_at FROM companies WHERE accept_code=%s",
                (accept_code,),
            )
            row = fetchone(cur)
            return _to_company(row) if row else None

    def create_company(
        self,
        *,
        name: str,
        description: Optional[str],
        accept_code: str,
        admin_id: Optional[str],
    ) -> Company:
        company_id = new_id()
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO companies(id, name, description, accept_code, admin_id)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (company_id, name, description, accept_code, admin_id),
            )
            cur.execute(
                "SELECT id, name, description, accept_code, admin_id, created_at FROM companies WHERE id=%s",
                (company_id,),
            )
            return _to_company(fetchone(cur))

    def list_all(self) -> Sequence[Company]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, name, description, accept_code, admin_id, created_at
                FROM companies
                ORDER BY created_at DESC
                """
            )
            return [_to_company(r) for r in fetchall(cur)]
