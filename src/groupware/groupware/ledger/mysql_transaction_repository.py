from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import TransactionType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, new_id, normalize_mysql_date
from .model import Transaction
from .repository import TransactionRepository

_COLUMNS = "id, user_id, type, amount, category, memo, date, created_at"


def _to_transaction(row: dict) -> Transaction:
    return Transaction(
        id=row["id"],
        user_id=row["user_id"],
        type=TransactionType(row["type"]),
        amount=int(row["amount"]),
        category=row.get("category"),
        memo=row.get("memo"),
        date=normalize_mysql_date(row["date"]),
        created_at=row.get("created_at"),
    )


class MySQLTransactionRepository(TransactionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _select_one(self, cur, transaction_id: str) -> Optional[Transaction]:
        cur.execute(f"SELECT {_COLUMNS} FROM transactions WHERE id=%s", (transaction_id,))
        row = fetchone(cur)
        return _to_transaction(row) if row else None

    def get_by_id(self, transaction_id: str) -> Optional[Transaction]:
        with db_cursor(self._conn_factory) as (_, cur):
            return self._select_one(cur, transaction_id)

    def create_transaction(
        self,
        *,
        user_id: str,
        type: TransactionType,
        amount: int,
        category: Optional[str],
        memo: Optional[str],
        tx_date: date,
    ) -> Transaction:
        transaction_id = new_id()
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO transactions(id, user_id, type, amount, category, memo, date)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (transaction_id, user_id, type.value, amount, category, memo, tx_date),
            )
            return self._select_one(cur, transaction_id)

    def update_transaction(
        self,
        transaction_id: str,
        *,
        type: TransactionType,
        amount: int,
        category: Optional[str],
        memo: Optional[str],
        tx_date: date,
    ) -> Transaction:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE transactions
                SET type=%s, amount=%s, category=%s, memo=%s, date=%s
                WHERE id=%s
                """,
                (type.value, amount, category, memo, tx_date, transaction_id),
            )
            return self._select_one(cur, transaction_id)

    def update_date(self, transaction_id: str, *, tx_date: date) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE transactions SET date=%s WHERE id=%s", (tx_date, transaction_id))
            return cur.rowcount > 0

    def delete_transaction(self, transaction_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM transactions WHERE id=%s", (transaction_id,))
            return cur.rowcount > 0

    def list_for_user_between(self, *, user_id: str, start: date, end: date) -> Sequence[Transaction]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM transactions
                WHERE user_id=%s AND date BETWEEN %s AND %s
                ORDER BY date, created_at
                """,
                (user_id, start, end),
            )
            return [_to_transaction(r) for r in fetchall(cur)]

    def list_all(self) -> Sequence[Transaction]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM transactions ORDER BY date ASC, created_at ASC")
            return [_to_transaction(r) for r in fetchall(cur)]
