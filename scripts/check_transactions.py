"""Print transaction diagnostics (row counts, Jan 1st rows, per-user totals, duplicates).

Usage: python scripts/check_transactions.py [--duplicates]
"""

from __future__ import annotations

import argparse
import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.groupware.groupware.database.connection import DatabaseConnection, DBConfig
from src.groupware.groupware.ledger.mysql_transaction_repository import MySQLTransactionRepository
from src.groupware.groupware.ledger.service import TransactionMaintenanceService, format_amount
from src.groupware.groupware.logging_setup import setup_logging


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--duplicates", action="store_true", help="also list suspected duplicate rows")
    args = parser.parse_args()

    settings = importlib.import_module(get_settings_module())
    setup_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    conn = DatabaseConnection(DBConfig.from_dict(settings.DB_CONFIG))
    service = TransactionMaintenanceService(MySQLTransactionRepository(conn))

    report = service.inspect()
    print(f"total rows: {report['total_count']}")
    print(f"rows dated Jan 1st: {report['jan1_count']}")
    for row in report["jan1_data"]:
        print(f"  {row['date']} {row['user_id']} {row['type']} {format_amount(row['amount'])} {row['memo'] or ''}")
    print("per user:")
    for user_id, stats in report["user_stats"].items():
        print(f"  {user_id}: {stats['count']} rows, {format_amount(stats['total'])}")
    print("most recent:")
    for row in report["recent_data"]:
        print(f"  {row['date']} {row['type']} {format_amount(row['amount'])} {row['category'] or ''}")

    if args.duplicates:
        groups = service.find_duplicates()
        print(f"suspected duplicate groups: {len(groups)}")
        for group in groups:
            print("  " + ", ".join(f"{t.id} ({t.date.isoformat()})" for t in group))


if __name__ == "__main__":
    main()
