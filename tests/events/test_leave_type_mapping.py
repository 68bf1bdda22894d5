from __future__ import annotations

from decimal import Decimal

import pytest

from src.groupware.groupware.events.mysql_event_repository import (
    MySQLLeaveTypeRepository,
    _to_leave_type,
    leave_code_text,
)


class FakeCursor:
    def __init__(self, rows):
        self._rows = rows
        self.executed = []

    def execute(self, sql, params=None):
        self.executed.append((sql, params))

    def fetchall(self):
        return self._rows

    def close(self):
        pass


class FakeConnection:
    def __init__(self, cursor):
        self._cursor = cursor

    def cursor(self, dictionary=True):
        return self._cursor

    def commit(self):
        pass

    def rollback(self):
        pass

    def close(self):
        pass


class FakeConnectionFactory:
    def __init__(self, rows):
        self.cursor = FakeCursor(rows)

    def connect(self):
        return FakeConnection(self.cursor)


@pytest.mark.parametrize(
    "value,expected",
    [(Decimal("1.00"), "1"), (Decimal("0.50"), "0.5"), (Decimal("0.25"), "0.25"), (Decimal("0.00"), "0")],
)
def test_code_is_value_as_text(value, expected):
    assert leave_code_text(float(value)) == expected
    assert _to_leave_type({"code": "annual", "label": "연차", "value": value}).code == expected


def test_code_falls_back_when_value_missing():
    leave = _to_leave_type({"code": "special", "label": "특별휴가", "value": None})
    assert (leave.code, leave.value) == ("special", 0.0)


def test_list_active_uses_value_codes():
    repo = MySQLLeaveTypeRepository(
        FakeConnectionFactory(
            [
                {"code": "annual", "label": "연차", "value": Decimal("1.00")},
                {"code": "half", "label": "반차", "value": Decimal("0.50")},
            ]
        )
    )
    assert [(t.code, t.label, t.value) for t in repo.list_active()] == [("1", "연차", 1.0), ("0.5", "반차", 0.5)]
