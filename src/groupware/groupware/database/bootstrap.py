from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable

from werkzeug.security import generate_password_hash

from .connection import DatabaseConnection, DBConfig
from .mysql_base import new_id

logger = logging.getLogger(__name__)

DEMO_COMPANY_CODE = "DEMO01"


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql compatible regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _strip_line_comments(sql: str) -> str:
    return "\n".join(line for line in sql.splitlines() if not line.lstrip().startswith("--"))


def iter_sql_statements(sql: str) -> Iterable[str]:
    """Split a schema/seed file on ';' while respecting quoted strings."""
    buf: list[str] = []
    in_single = False
    in_double = False
    escape = False

    for ch in _strip_line_comments(sql):
        if escape:
            buf.append(ch)
            escape = False
            continue

        if ch == "\\":
            buf.append(ch)
            escape = True
            continue

        if ch == "'" and not in_double:
            in_single = not in_single
        elif ch == '"' and not in_single:
            in_double = not in_double
        elif ch == ";" and not in_single and not in_double:
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue

        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def _exec_sql(cur, sql: str) -> int:
    count = 0
    for stmt in iter_sql_statements(sql):
        cur.execute(stmt)
        count += 1
    return count


def _factory(db_config: dict) -> DatabaseConnection:
    return DatabaseConnection(DBConfig.from_dict(db_config))


def ensure_database_exists(db_config: dict) -> None:
    target = DBConfig.from_dict(db_config)
    conn = _factory(db_config).connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def _run_file(db_config: dict, path: Path) -> int:
    sql = _strip_create_db_and_use(path.read_text(encoding="utf-8"))
    conn = _factory(db_config).connect()
    try:
        cur = conn.cursor()
        count = _exec_sql(cur, sql)
        conn.commit()
        return count
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    count = _run_file(db_config, Path(schema_path))
    logger.info("schema applied (%d statements) from %s", count, schema_path)


def apply_seed_sql(db_config: dict, *, seed_path: str | Path) -> None:
    count = _run_file(db_config, Path(seed_path))
    logger.info("seed applied (%d statements) from %s", count, seed_path)


def ensure_demo_users(db_config: dict) -> None:
    """Create (or reset) one admin and one member bound to the demo company."""
    conn = _factory(db_config).connect()
    try:
        cur = conn.cursor(dictionary=True)

        cur.execute("SELECT id FROM companies WHERE accept_code=%s", (DEMO_COMPANY_CODE,))
        row = cur.fetchone()
        if row:
            company_id = row["id"]
        else:
            company_id = new_id()
            cur.execute(
                "INSERT INTO companies (id, name, description, accept_code) VALUES (%s, %s, %s, %s)",
                (company_id, "데모 회사", "초기 데이터", DEMO_COMPANY_CODE),
            )

        def upsert_profile(email: str, full_name: str, password: str, is_admin: bool) -> None:
            password_hash = generate_password_hash(password)
            cur.execute("SELECT id FROM profiles WHERE email=%s", (email,))
            existing = cur.fetchone()
            if existing:
                cur.execute(
                    """
                    UPDATE profiles
                    SET full_name=%s, password_hash=%s, is_admin=%s, company_id=%s
                    WHERE email=%s
                    """,
                    (full_name, password_hash, int(is_admin), company_id, email),
                )
            else:
                cur.execute(
                    """
                    INSERT INTO profiles (id, email, full_name, password_hash, is_admin, company_id)
                    VALUES (%s, %s, %s, %s, %s, %s)
                    """,
                    (new_id(), email, full_name, password_hash, int(is_admin), company_id),
                )

        upsert_profile("admin@example.com", "관리자", "admin123", True)
        upsert_profile("member@example.com", "홍길동", "member123", False)

        cur.execute("UPDATE companies SET admin_id=(SELECT id FROM profiles WHERE email=%s) WHERE id=%s",
                    ("admin@example.com", company_id))

        conn.commit()
    finally:
        conn.close()


def list_tables(db_config: dict) -> list[str]:
    conn = _factory(db_config).connect()
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
