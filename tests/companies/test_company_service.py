from __future__ import annotations

import pytest

from src.groupware.groupware.companies.service import CompanyService, generate_accept_code
from src.groupware.groupware.core.constants import ACCEPT_CODE_ALPHABET
from src.groupware.groupware.core.exceptions import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)


def _service(repos, codes=None):
    generator = None
    if codes is not None:
        it = iter(codes)
        generator = lambda: next(it)  # noqa: E731
    return CompanyService(repos.companies, repos.profiles, repos.departments, code_generator=generator)


def test_generate_accept_code_shape():
    code = generate_accept_code()
    assert len(code) == 6
    assert all(ch in ACCEPT_CODE_ALPHABET for ch in code)


def test_create_company_admin_only(repos):
    service = _service(repos)
    with pytest.raises(AuthorizationError):
        service.create_company(user_id="user-a", name="새 회사")


def test_create_company_requires_name(repos):
    with pytest.raises(ValidationError):
        _service(repos).create_company(user_id="admin-1", name="  ")


def test_create_company_retries_on_code_collision(repos):
    service = _service(repos, codes=["ABC123", "XYZ789"])
    company = service.create_company(user_id="admin-1", name="새 회사", description="  ")
    assert company.accept_code == "XYZ789"
    assert company.description is None
    assert company.admin_id == "admin-1"


def test_create_company_gives_up_after_repeated_collisions(repos):
    service = _service(repos, codes=["ABC123"] * 20)
    with pytest.raises(ConflictError):
        service.create_company(user_id="admin-1", name="새 회사")


def test_list_companies_newest_first(repos):
    service = _service(repos, codes=["AAAAA1", "AAAAA2"])
    first = service.create_company(user_id="admin-1", name="첫번째")
    second = service.create_company(user_id="admin-1", name="두번째")
    listed = service.list_companies(user_id="admin-1")
    assert [c.id for c in listed][:2] == [second.id, first.id]


def test_join_company_trims_and_uppercases(repos):
    company = _service(repos).join_company(user_id="loner", code="  abc123 ")
    assert company.id == "company-1"
    assert repos.profiles.get_by_id("loner").company_id == "company-1"


def test_join_company_blank_or_unknown(repos):
    service = _service(repos)
    with pytest.raises(ValidationError):
        service.join_company(user_id="loner", code=" ")
    with pytest.raises(NotFoundError):
        service.join_company(user_id="loner", code="NOPE00")


def test_team_members_sorted_by_email(repos):
    team = _service(repos).get_my_team(user_id="user-a")
    assert team.company.name == "테스트 회사"
    assert [m.email for m in team.members] == ["a@example.com", "admin@example.com"]


def test_team_without_company(repos):
    team = _service(repos).get_my_team(user_id="loner")
    assert team.company is None
    assert team.members == []


def test_departments_sorted_by_name(repos):
    assert [d.name for d in _service(repos).list_departments()] == ["개발팀", "영업팀"]
