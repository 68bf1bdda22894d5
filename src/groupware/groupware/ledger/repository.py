from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import TransactionType
from .model import Transaction


class TransactionRepository(Protocol):
    def get_by_id(self, transaction_id: str) -> Optional[Transaction]:
        raise NotImplementedError

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
        raise NotImplementedError

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
        raise NotImplementedError

    def update_date(self, transaction_id: str, *, tx_date: date) -> bool:
        raise NotImplementedError

    def delete_transaction(self, transaction_id: str) -> bool:
        raise NotImplementedError

    def list_for_user_between(self, *, user_id: str, start: date, end: date) -> Sequence[Transaction]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Transaction]:
        """Every row, ordered by date ascending."""
        raise NotImplementedError
