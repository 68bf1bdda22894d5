from __future__ import annotations

from pathlib import Path

from src.groupware.groupware.database.bootstrap import iter_sql_statements

REPO_ROOT = Path(__file__).resolve().parents[1]


def test_splitter_respects_quotes_and_comments():
    sql = """
    -- comment; with semicolon
    INSERT INTO t VALUES ('a;b');
    INSERT INTO t VALUES ("c;d")   ;
    SELECT 1
    """
    assert list(iter_sql_statements(sql)) == [
        "INSERT INTO t VALUES ('a;b')",
        'INSERT INTO t VALUES ("c;d")',
        "SELECT 1",
    ]


def test_schema_declares_every_table():
    schema = (REPO_ROOT / "database" / "schema.sql").read_text(encoding="utf-8")
    statements = list(iter_sql_statements(schema))
    for table in (
        "companies",
        "departments",
        "profiles",
        "meta_codes",
        "events",
        "attendance",
        "transactions",
        "biometric_credentials",
    ):
        assert any(f"CREATE TABLE IF NOT EXISTS {table} (" in s for s in statements), table


def test_seed_has_leave_types():
    seed = (REPO_ROOT / "database" / "seed.sql").read_text(encoding="utf-8")
    assert "'leave_type'" in seed
