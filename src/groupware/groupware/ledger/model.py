from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import TransactionType


@dataclass(frozen=True)
class Transaction:
    """Domain entity: one personal ledger entry (income or expense)."""

    id: str
    user_id: str
    type: TransactionType
    amount: int
    category: Optional[str]
    memo: Optional[str]
    date: date
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "type": self.type.value,
            "amount": self.amount,
            "category": self.category,
            "memo": self.memo,
            "date": self.date.isoformat(),
        }


@dataclass(frozen=True)
class DailyTotal:
    date: date
    income: int
    expense: int

    @property
    def net(self) -> int:
        return self.income - self.expense

    def to_dict(self) -> dict:
        return {"date": self.date.isoformat(), "income": self.income, "expense": self.expense, "net": self.net}
