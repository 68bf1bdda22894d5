from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, new_id
from .model import BiometricCredential
from .repository import BiometricCredentialRepository

_COLUMNS = "id, user_id, credential_id, public_key, sign_count, created_at, updated_at"


def _to_credential(row: dict) -> BiometricCredential:
    return BiometricCredential(
        id=row["id"],
        user_id=row["user_id"],
        credential_id=row["credential_id"],
        public_key=row["public_key"],
        sign_count=int(row.get("sign_count") or 0),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )


class MySQLBiometricCredentialRepository(BiometricCredentialRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_credential_id(self, credential_id: str) -> Optional[BiometricCredential]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM biometric_credentials WHERE credential_id=%s", (credential_id,))
            row = fetchone(cur)
            return _to_credential(row) if row else None

    def list_for_user(self, user_id: str) -> Sequence[BiometricCredential]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM biometric_credentials WHERE user_id=%s ORDER BY created_at",
                (user_id,),
            )
            return [_to_credential(r) for r in fetchall(cur)]

    def create_credential(
        self, *, user_id: str, credential_id: str, public_key: str, sign_count: int
    ) -> BiometricCredential:
        pk = new_id()
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO biometric_credentials(id, user_id, credential_id, public_key, sign_count)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (pk, user_id, credential_id, public_key, sign_count),
            )
            cur.execute(f"SELECT {_COLUMNS} FROM biometric_credentials WHERE id=%s", (pk,))
            return _to_credential(fetchone(cur))

    def update_sign_count(self, credential_pk: str, *, sign_count: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE biometric_credentials SET sign_count=%s WHERE id=%s", (sign_count, credential_pk))
            return cur.rowcount > 0

    def delete_for_user(self, user_id: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM biometric_credentials WHERE user_id=%s", (user_id,))
            return int(cur.rowcount)

    def table_exists(self) -> bool:
        with db_cursor(self._conn_factory, dictionary=False) as (_, cur):
            cur.execute("SHOW TABLES LIKE 'biometric_credentials'")
            return cur.fetchone() is not None
