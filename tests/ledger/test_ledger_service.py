from __future__ import annotations

from datetime import date

import pytest

from src.groupware.groupware.core.enums import TransactionType
from src.groupware.groupware.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from src.groupware.groupware.ledger.service import LedgerService, format_amount, parse_amount


@pytest.fixture
def ledger(repos):
    return LedgerService(repos.transactions)


@pytest.mark.parametrize("raw,expected", [("1,234,000", 1234000), (" 5000 ", 5000), (42, 42)])
def test_parse_amount(raw, expected):
    assert parse_amount(raw) == expected


@pytest.mark.parametrize("raw", [None, "", "abc", "-100", "0", "12.5", "²", "١٢"])
def test_parse_amount_rejects(raw):
    with pytest.raises(ValidationError):
        parse_amount(raw)


def test_format_amount():
    assert format_amount(1234000) == "1,234,000"


def test_add_requires_type_and_amount(ledger):
    with pytest.raises(ValidationError, match="타입과 금액을 입력하세요!"):
        ledger.add(user_id="user-a", tx_date="2025-06-11", type="", amount="1000")
    with pytest.raises(ValidationError, match="타입과 금액을 입력하세요!"):
        ledger.add(user_id="user-a", tx_date="2025-06-11", type="expense", amount="")


def test_add_normalizes_fields(ledger):
    tx = ledger.add(
        user_id="user-a", tx_date="2025-06-11", type="expense", amount="12,500", category=" 식비 ", memo=""
    )
    assert tx.type == TransactionType.EXPENSE
    assert tx.amount == 12500
    assert tx.category == "식비"
    assert tx.memo is None
    assert tx.date == date(2025, 6, 11)


def test_update_and_delete_owner_only(ledger):
    tx = ledger.add(user_id="user-a", tx_date="2025-06-11", type="income", amount="1000")

    with pytest.raises(AuthorizationError):
        ledger.update(user_id="admin-1", transaction_id=tx.id, tx_date="2025-06-11", type="income", amount="1")
    with pytest.raises(AuthorizationError):
        ledger.delete(user_id="admin-1", transaction_id=tx.id)

    updated = ledger.update(
        user_id="user-a", transaction_id=tx.id, tx_date="2025-06-12", type="expense", amount="2,000"
    )
    assert (updated.type, updated.amount, updated.date) == (TransactionType.EXPENSE, 2000, date(2025, 6, 12))

    ledger.delete(user_id="user-a", transaction_id=tx.id)
    with pytest.raises(NotFoundError):
        ledger.delete(user_id="user-a", transaction_id=tx.id)


def test_month_totals(ledger):
    ledger.add(user_id="user-a", tx_date="2025-06-01", type="income", amount="3,000,000")
    ledger.add(user_id="user-a", tx_date="2025-06-01", type="expense", amount="10,000")
    ledger.add(user_id="user-a", tx_date="2025-06-15", type="expense", amount="25,000")
    ledger.add(user_id="user-a", tx_date="2025-07-01", type="expense", amount="99,999")
    ledger.add(user_id="admin-1", tx_date="2025-06-15", type="expense", amount="1")

    daily = ledger.daily_totals(user_id="user-a", year=2025, month=6)
    assert [(d.date.day, d.income, d.expense, d.net) for d in daily] == [
        (1, 3000000, 10000, 2990000),
        (15, 0, 25000, -25000),
    ]

    summary = ledger.month_summary(user_id="user-a", year=2025, month=6)
    assert (summary.income, summary.expense, summary.net) == (3000000, 35000, 2965000)
    assert summary.to_dict()["expense_text"] == "35,000"


def test_invalid_month(ledger):
    with pytest.raises(ValidationError):
        ledger.list_month(user_id="user-a", year=2025, month=13)


def test_create_route_rejects_non_ascii_digits(client, login, repos):
    login()
    resp = client.post("/api/transactions", json={"date": "2025-06-11", "type": "expense", "amount": "²"})
    assert resp.status_code == 400
    assert resp.get_json() == {"success": False, "error": "금액은 숫자만 입력하세요"}
    assert repos.transactions.by_id == {}
