from __future__ import annotations

import itertools
from dataclasses import replace
from datetime import date, datetime, time
from typing import Optional

import pytest
from werkzeug.security import generate_password_hash

from src.groupware.groupware.attendance.model import AttendanceRecord
from src.groupware.groupware.biometric.model import BiometricCredential
from src.groupware.groupware.companies.model import Company, Department
from src.groupware.groupware.container import Repositories, assemble_container
from src.groupware.groupware.core.enums import EventType, Visibility
from src.groupware.groupware.events.model import Event, EventValues, LeaveType
from src.groupware.groupware.ledger.model import Transaction
from src.groupware.groupware.main import create_app
from src.groupware.groupware.public_holidays.service import HolidayCalendar
from src.groupware.groupware.users.model import Profile

_ids = itertools.count(1)


def _next_id(prefix: str) -> str:
    return f"{prefix}-{next(_ids)}"


class InMemoryProfiles:
    def __init__(self):
        self.by_id: dict[str, Profile] = {}

    def add(self, profile: Profile) -> Profile:
        self.by_id[profile.id] = profile
        return profile

    def get_by_id(self, user_id):
        return self.by_id.get(user_id)

    def get_by_email(self, email):
        return next((p for p in self.by_id.values() if p.email == email), None)

    def create_profile(self, *, email, full_name, password_hash, company_id):
        profile = Profile(
            id=_next_id("user"),
            email=email,
            full_name=full_name,
            password_hash=password_hash,
            company_id=company_id,
        )
        self.by_id[profile.id] = profile
        return profile.id

    def _update(self, user_id, **changes) -> bool:
        if user_id not in self.by_id:
            return False
        self.by_id[user_id] = replace(self.by_id[user_id], **changes)
        return True

    def update_password_hash(self, user_id, *, password_hash):
        return self._update(user_id, password_hash=password_hash)

    def update_full_name(self, user_id, *, full_name):
        return self._update(user_id, full_name=full_name)

    def update_work_settings(self, user_id, *, weekly_work_hours, weekly_work_start, weekly_work_end):
        return self._update(
            user_id,
            weekly_work_hours=weekly_work_hours,
            weekly_work_start=weekly_work_start,
            weekly_work_end=weekly_work_end,
        )

    def set_company(self, user_id, *, company_id):
        return self._update(user_id, company_id=company_id)

    def list_by_company(self, company_id):
        return sorted((p for p in self.by_id.values() if p.company_id == company_id), key=lambda p: p.email)


class InMemoryCompanies:
    def __init__(self):
        self.by_id: dict[str, Company] = {}
        self._seq = 0

    def add(self, company: Company) -> Company:
        self.by_id[company.id] = company
        return company

    def get_by_id(self, company_id):
        return self.by_id.get(company_id)

    def get_by_accept_code(self, accept_code):
        return next((c for c in self.by_id.values() if c.accept_code == accept_code), None)

    def create_company(self, *, name, description, accept_code, admin_id):
        self._seq += 1
        company = Company(
            id=_next_id("company"),
            name=name,
            description=description,
            accept_code=accept_code,
            admin_id=admin_id,
            created_at=datetime(2025, 1, 1, 9, self._seq % 60),
        )
        self.by_id[company.id] = company
        return company

    def list_all(self):
        return sorted(self.by_id.values(), key=lambda c: c.created_at or datetime.min, reverse=True)


class InMemoryDepartments:
    def __init__(self, departments=()):
        self.items = list(departments)

    def list_all(self):
        return sorted(self.items, key=lambda d: d.name)


class InMemoryEvents:
    def __init__(self):
        self.by_id: dict[str, Event] = {}

    def _build(self, event_id, created_by, values: EventValues) -> Event:
        return Event(
            id=event_id,
            title=values.title,
            description=values.description,
            start_date=values.start_date,
            end_date=values.end_date,
            location=values.location,
            created_by=created_by,
            department_id=values.department_id,
            company_id=values.company_id,
            is_all_day=values.is_all_day,
            event_type=values.event_type,
            visibility=values.visibility,
            exclude_lunch_time=values.exclude_lunch_time,
            leave_type=values.leave_type,
        )

    def _sorted(self, items):
        return sorted(items, key=lambda e: e.start_date)

    def get_by_id(self, event_id):
        return self.by_id.get(event_id)

    def create_event(self, *, created_by, values):
        event = self._build(_next_id("event"), created_by, values)
        self.by_id[event.id] = event
        return event

    def update_event(self, event_id, *, values):
        event = self._build(event_id, self.by_id[event_id].created_by, values)
        self.by_id[event_id] = event
        return event

    def delete_event(self, event_id):
        return self.by_id.pop(event_id, None) is not None

    def list_personal(self, *, user_id):
        return self._sorted(
            e for e in self.by_id.values() if e.created_by == user_id and e.visibility == Visibility.PERSONAL
        )

    def list_company(self, *, company_id):
        return self._sorted(
            e for e in self.by_id.values() if e.company_id == company_id and e.visibility == Visibility.COMPANY
        )

    def list_visible_between(self, *, user_id, company_id, start, end):
        return self._sorted(
            e
            for e in self.by_id.values()
            if e.start_date <= end
            and e.end_date >= start
            and (
                (e.created_by == user_id and e.visibility == Visibility.PERSONAL)
                or (e.visibility == Visibility.COMPANY and e.company_id == company_id)
            )
        )

    def list_by_titles_between(self, *, user_id, titles, start, end):
        return self._sorted(
            e
            for e in self.by_id.values()
            if e.created_by == user_id and e.title in titles and start <= e.start_date <= end
        )

    def find_by_title_on_date(self, *, user_id, title, day):
        lo, hi = datetime.combine(day, time.min), datetime.combine(day, time.max)
        found = self._sorted(
            e for e in self.by_id.values() if e.created_by == user_id and e.title == title and lo <= e.start_date <= hi
        )
        return found[0] if found else None

    def list_holiday_events(self, *, user_id, start, end):
        return self._sorted(
            e
            for e in self.by_id.values()
            if e.created_by == user_id
            and e.event_type == EventType.HOLIDAY
            and e.start_date <= end
            and e.end_date >= start
        )


class InMemoryLeaveTypes:
    def __init__(self, items=None):
        self.items = list(
            items
            if items is not None
            else [
                LeaveType(code="0.5", label="반차", value=0.5),
                LeaveType(code="1", label="연차", value=1.0),
                LeaveType(code="0.25", label="반반차", value=0.25),
            ]
        )

    def list_active(self):
        return sorted(self.items, key=lambda t: t.value, reverse=True)


class InMemoryAttendance:
    def __init__(self):
        self.by_key: dict[tuple[str, date], AttendanceRecord] = {}

    def get_for_user_and_date(self, user_id, work_date):
        return self.by_key.get((user_id, work_date))

    def upsert_clock_in(self, *, user_id, company_id, work_date, clock_in_time):
        existing = self.by_key.get((user_id, work_date))
        record = AttendanceRecord(
            id=existing.id if existing else _next_id("att"),
            user_id=user_id,
            company_id=company_id,
            work_date=work_date,
            clock_in_time=clock_in_time,
            clock_out_time=existing.clock_out_time if existing else None,
        )
        self.by_key[(user_id, work_date)] = record
        return record

    def set_clock_out(self, *, user_id, work_date, clock_out_time):
        record = replace(self.by_key[(user_id, work_date)], clock_out_time=clock_out_time)
        self.by_key[(user_id, work_date)] = record
        return record


class InMemoryTransactions:
    def __init__(self):
        self.by_id: dict[str, Transaction] = {}

    def add(self, tx: Transaction) -> Transaction:
        self.by_id[tx.id] = tx
        return tx

    def get_by_id(self, transaction_id):
        return self.by_id.get(transaction_id)

    def create_transaction(self, *, user_id, type, amount, category, memo, tx_date):
        tx = Transaction(
            id=_next_id("tx"), user_id=user_id, type=type, amount=amount, category=category, memo=memo, date=tx_date
        )
        self.by_id[tx.id] = tx
        return tx

    def update_transaction(self, transaction_id, *, type, amount, category, memo, tx_date):
        tx = replace(self.by_id[transaction_id], type=type, amount=amount, category=category, memo=memo, date=tx_date)
        self.by_id[transaction_id] = tx
        return tx

    def update_date(self, transaction_id, *, tx_date):
        if transaction_id not in self.by_id:
            return False
        self.by_id[transaction_id] = replace(self.by_id[transaction_id], date=tx_date)
        return True

    def delete_transaction(self, transaction_id):
        return self.by_id.pop(transaction_id, None) is not None

    def list_for_user_between(self, *, user_id, start, end):
        return sorted(
            (t for t in self.by_id.values() if t.user_id == user_id and start <= t.date <= end), key=lambda t: t.date
        )

    def list_all(self):
        return sorted(self.by_id.values(), key=lambda t: t.date)


class InMemoryBiometric:
    def __init__(self, *, table_exists: bool = True):
        self.by_id: dict[str, BiometricCredential] = {}
        self._table_exists = table_exists

    def get_by_credential_id(self, credential_id):
        return next((c for c in self.by_id.values() if c.credential_id == credential_id), None)

    def list_for_user(self, user_id):
        return [c for c in self.by_id.values() if c.user_id == user_id]

    def create_credential(self, *, user_id, credential_id, public_key, sign_count):
        cred = BiometricCredential(
            id=_next_id("cred"),
            user_id=user_id,
            credential_id=credential_id,
            public_key=public_key,
            sign_count=sign_count,
        )
        self.by_id[cred.id] = cred
        return cred

    def update_sign_count(self, credential_pk, *, sign_count):
        self.by_id[credential_pk] = replace(self.by_id[credential_pk], sign_count=sign_count)
        return True

    def delete_for_user(self, user_id):
        doomed = [k for k, c in self.by_id.items() if c.user_id == user_id]
        for k in doomed:
            del self.by_id[k]
        return len(doomed)

    def table_exists(self):
        return self._table_exists


def make_profile(
    user_id: str = "user-a",
    *,
    email: str = "a@example.com",
    password: str = "secret123",
    company_id: Optional[str] = "company-1",
    is_admin: bool = False,
    **extra,
) -> Profile:
    return Profile(
        id=user_id,
        email=email,
        full_name=extra.pop("full_name", "김철수"),
        password_hash=generate_password_hash(password),
        company_id=company_id,
        is_admin=is_admin,
        **extra,
    )


@pytest.fixture
def fixed_now() -> datetime:
    # Wednesday
    return datetime(2025, 6, 11, 9, 0, 0)


@pytest.fixture(scope="session")
def holiday_calendar() -> HolidayCalendar:
    return HolidayCalendar("KR")


@pytest.fixture
def repos() -> Repositories:
    companies = InMemoryCompanies()
    companies.add(Company(id="company-1", name="테스트 회사", description=None, accept_code="ABC123"))
    profiles = InMemoryProfiles()
    profiles.add(make_profile())
    profiles.add(make_profile("admin-1", email="admin@example.com", password="admin123", is_admin=True))
    profiles.add(make_profile("loner", email="loner@example.com", company_id=None))
    return Repositories(
        profiles=profiles,
        companies=companies,
        departments=InMemoryDepartments([Department(id="d2", name="영업팀"), Department(id="d1", name="개발팀")]),
        events=InMemoryEvents(),
        leave_types=InMemoryLeaveTypes(),
        attendance=InMemoryAttendance(),
        transactions=InMemoryTransactions(),
        biometric_credentials=InMemoryBiometric(),
    )


@pytest.fixture
def container(repos, holiday_calendar):
    return assemble_container(
        repos,
        rp_id="localhost",
        rp_name="그룹웨어",
        holiday_calendar=holiday_calendar,
        biometric_random_bytes=lambda n: bytes(range(n)),
    )


@pytest.fixture
def app(monkeypatch, container):
    monkeypatch.setenv("APP_ENV", "testing")
    return create_app(container=container)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login(client):
    def _login(email: str = "a@example.com", password: str = "secret123"):
        resp = client.post("/api/auth/login", json={"email": email, "password": password})
        assert resp.status_code == 200, resp.get_json()
        return resp

    return _login
