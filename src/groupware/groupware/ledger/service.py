from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional, Sequence, Union

from ..common.datetime_utils import parse_iso_date
from ..common.validators import blank_to_none
from ..core.constants import RECENT_TRANSACTIONS_LIMIT
from ..core.enums import TransactionType
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from .model import DailyTotal, Transaction
from .repository import TransactionRepository

logger = logging.getLogger(__name__)


def parse_amount(value: Union[str, int, None]) -> int:
    """'1,234,000' -> 1234000. Must be a positive whole number."""
    if value is None:
        raise ValidationError("타입과 금액을 입력하세요!")
    text = str(value).replace(",", "").strip()
    if not text:
        raise ValidationError("타입과 금액을 입력하세요!")
    if not (text.isascii() and text.isdigit()):
        raise ValidationError("금액은 숫자만 입력하세요")
    amount = int(text)
    if amount <= 0:
        raise ValidationError("금액은 0보다 커야 합니다")
    return amount


def format_amount(amount: int) -> str:
    return f"{int(amount):,}"


def _month_bounds(year: int, month: int) -> tuple[date, date]:
    if month < 1 or month > 12:
        raise ValidationError("월 값이 올바르지 않습니다")
    first = date(year, month, 1)
    next_first = date(year + 1, 1, 1) if month == 12 else date(year, month + 1, 1)
    return first, next_first - timedelta(days=1)


def _as_date(value: Union[str, date, None]) -> date:
    if isinstance(value, date):
        return value
    if not value:
        raise ValidationError("날짜를 입력하세요")
    try:
        return parse_iso_date(str(value))
    except ValueError:
        raise ValidationError("날짜 형식이 올바르지 않습니다 (YYYY-MM-DD)")


def _as_type(value: Union[str, TransactionType, None]) -> TransactionType:
    if not value:
        raise ValidationError("타입과 금액을 입력하세요!")
    try:
        return TransactionType(value)
    except ValueError:
        raise ValidationError("타입은 income 또는 expense 여야 합니다")


@dataclass(frozen=True)
class MonthSummary:
    year: int
    month: int
    income: int
    expense: int

    @property
    def net(self) -> int:
        return self.income - self.expense

    def to_dict(self) -> dict:
        return {
            "year": self.year,
            "month": self.month,
            "income": self.income,
            "expense": self.expense,
            "net": self.net,
            "income_text": format_amount(self.income),
            "expense_text": format_amount(self.expense),
        }


class LedgerService:
    """Use cases: personal income/expense ledger."""

    def __init__(self, transactions: TransactionRepository):
        self._transactions = transactions

    def _get_owned(self, *, user_id: str, transaction_id: str) -> Transaction:
        tx = self._transactions.get_by_id(transaction_id)
        if not tx:
            raise NotFoundError("거래 내역을 찾을 수 없습니다")
        if tx.user_id != user_id:
            raise AuthorizationError("본인의 거래 내역만 수정할 수 있습니다")
        return tx

    def add(
        self,
        *,
        user_id: str,
        tx_date: Union[str, date, None],
        type: Union[str, TransactionType, None],
        amount: Union[str, int, None],
        category: Optional[str] = None,
        memo: Optional[str] = None,
    ) -> Transaction:
        if not type or amount in (None, ""):
            raise ValidationError("타입과 금액을 입력하세요!")
        tx = self._transactions.create_transaction(
            user_id=user_id,
            type=_as_type(type),
            amount=parse_amount(amount),
            category=blank_to_none(category),
            memo=blank_to_none(memo),
            tx_date=_as_date(tx_date),
        )
        logger.info("transaction added id=%s user_id=%s", tx.id, user_id)
        return tx

    def update(
        self,
        *,
        user_id: str,
        transaction_id: str,
        tx_date: Union[str, date, None],
        type: Union[str, TransactionType, None],
        amount: Union[str, int, None],
        category: Optional[str] = None,
        memo: Optional[str] = None,
    ) -> Transaction:
        self._get_owned(user_id=user_id, transaction_id=transaction_id)
        if not type or amount in (None, ""):
            raise ValidationError("타입과 금액을 입력하세요!")
        return self._transactions.update_transaction(
            transaction_id,
            type=_as_type(type),
            amount=parse_amount(amount),
            category=blank_to_none(category),
            memo=blank_to_none(memo),
            tx_date=_as_date(tx_date),
        )

    def delete(self, *, user_id: str, transaction_id: str) -> None:
        self._get_owned(user_id=user_id, transaction_id=transaction_id)
        self._transactions.delete_transaction(transaction_id)
        logger.info("transaction deleted id=%s", transaction_id)

    def list_month(self, *, user_id: str, year: int, month: int) -> Sequence[Transaction]:
        start, end = _month_bounds(year, month)
        return self._transactions.list_for_user_between(user_id=user_id, start=start, end=end)

    def daily_totals(self, *, user_id: str, year: int, month: int) -> list[DailyTotal]:
        income: dict[date, int] = defaultdict(int)
        expense: dict[date, int] = defaultdict(int)
        for tx in self.list_month(user_id=user_id, year=year, month=month):
            if tx.type == TransactionType.INCOME:
                income[tx.date] += tx.amount
            else:
                expense[tx.date] += tx.amount
        days = sorted(set(income) | set(expense))
        return [DailyTotal(date=d, income=income[d], expense=expense[d]) for d in days]

    def month_summary(self, *, user_id: str, year: int, month: int) -> MonthSummary:
        totals = self.daily_totals(user_id=user_id, year=year, month=month)
        return MonthSummary(
            year=year,
            month=month,
            income=sum(t.income for t in totals),
            expense=sum(t.expense for t in totals),
        )


class TransactionMaintenanceService:
    """Admin diagnostics and duplicate repair over the whole transactions table."""

    def __init__(self, transactions: TransactionRepository):
        self._transactions = transactions

    def inspect(self) -> dict:
        rows = list(self._transactions.list_all())
        jan1 = [t for t in rows if t.date.month == 1 and t.date.day == 1]

        user_stats: dict[str, dict] = {}
        for t in rows:
            stats = user_stats.setdefault(t.user_id, {"count": 0, "total": 0})
            stats["count"] += 1
            stats["total"] += t.amount

        return {
            "total_count": len(rows),
            "jan1_count": len(jan1),
            "jan1_data": [t.to_dict() for t in jan1],
            "recent_data": [t.to_dict() for t in rows[-RECENT_TRANSACTIONS_LIMIT:]],
            "user_stats": user_stats,
            "all_data": [t.to_dict() for t in rows],
        }

    def find_duplicates(self) -> list[list[Transaction]]:
        """Rows identical except for id/date, with dates at most one day apart."""
        groups: dict[tuple, list[Transaction]] = defaultdict(list)
        for t in self._transactions.list_all():
            groups[(t.user_id, t.type, t.amount, t.category, t.memo)].append(t)

        out: list[list[Transaction]] = []
        for items in groups.values():
            if len(items) < 2:
                continue
            items.sort(key=lambda t: t.date)
            cluster = [items[0]]
            for t in items[1:]:
                if (t.date - cluster[-1].date).days <= 1:
                    cluster.append(t)
                    continue
                if len(cluster) > 1:
                    out.append(cluster)
                cluster = [t]
            if len(cluster) > 1:
                out.append(cluster)
        return out

    def repair_duplicate(
        self,
        *,
        delete_id: str,
        keep_id: str,
        new_date: Union[str, date, None],
    ) -> list[Transaction]:
        if delete_id == keep_id:
            raise ValidationError("삭제할 항목과 유지할 항목이 같습니다")
        if not self._transactions.get_by_id(keep_id):
            raise NotFoundError("유지할 거래 내역을 찾을 수 없습니다")
        target = _as_date(new_date)

        if not self._transactions.delete_transaction(delete_id):
            raise NotFoundError("삭제할 거래 내역을 찾을 수 없습니다")
        self._transactions.update_date(keep_id, tx_date=target)
        logger.info("duplicate repaired deleted=%s kept=%s date=%s", delete_id, keep_id, target.isoformat())
        return list(self._transactions.list_all())
