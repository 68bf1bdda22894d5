from __future__ import annotations

import logging
import secrets
from typing import Callable, Optional, Sequence

from ..common.validators import blank_to_none, require_non_empty
from ..core.constants import ACCEPT_CODE_ALPHABET, ACCEPT_CODE_LENGTH
from ..core.exceptions import AuthorizationError, ConflictError, NotFoundError, ValidationError
from ..users.repository import ProfileRepository
from .model import Company, Department, Team, TeamMember
from .repository import CompanyRepository, DepartmentRepository

logger = logging.getLogger(__name__)

_MAX_CODE_ATTEMPTS = 10


def generate_accept_code(length: int = ACCEPT_CODE_LENGTH) -> str:
    return "".join(secrets.choice(ACCEPT_CODE_ALPHABET) for _ in range(length))


class CompanyService:
    """Use cases: company administration and team membership."""

    def __init__(
        self,
        companies: CompanyRepository,
        profiles: ProfileRepository,
        departments: DepartmentRepository,
        *,
        code_generator: Optional[Callable[[], str]] = None,
    ):
        self._companies = companies
        self._profiles = profiles
        self._departments = departments
        self._code_generator = code_generator or generate_accept_code

    def _require_admin(self, user_id: str) -> None:
        profile = self._profiles.get_by_id(user_id)
        if not profile or not profile.is_admin:
            raise AuthorizationError("관리자만 접근할 수 있습니다.")

    def _unique_code(self) -> str:
        for _ in range(_MAX_CODE_ATTEMPTS):
            code = self._code_generator()
            if not self._companies.get_by_accept_code(code):
                return code
        raise ConflictError("회사 코드를 생성하지 못했습니다. 다시 시도해주세요.")

    def create_company(self, *, user_id: str, name: str, description: Optional[str] = None) -> Company:
        self._require_admin(user_id)
        name = require_non_empty(name, "회사 이름")

        company = self._companies.create_company(
            name=name,
            description=blank_to_none(description),
            accept_code=self._unique_code(),
            admin_id=user_id,
        )
        logger.info("company created id=%s code=%s", company.id, company.accept_code)
        return company

    def list_companies(self, *, user_id: str) -> Sequence[Company]:
        self._require_admin(user_id)
        return self._companies.list_all()

    def join_company(self, *, user_id: str, code: str) -> Company:
        code = (code or "").strip().upper()
        if not code:
            raise ValidationError("회사 코드를 입력해주세요.")

        company = self._companies.get_by_accept_code(code)
        if not company:
            raise NotFoundError("유효하지 않은 회사 코드입니다.")

        if not self._profiles.get_by_id(user_id):
            raise NotFoundError("프로필을 찾을 수 없습니다")

        self._profiles.set_company(user_id, company_id=company.id)
        logger.info("user %s joined company %s", user_id, company.id)
        return company

    def get_my_team(self, *, user_id: str) -> Team:
        profile = self._profiles.get_by_id(user_id)
        if not profile:
            raise NotFoundError("프로필을 찾을 수 없습니다")
        if not profile.company_id:
            return Team(company=None, members=[])

        company = self._companies.get_by_id(profile.company_id)
        members = [
            TeamMember(id=p.id, email=p.email, full_name=p.full_name)
            for p in sorted(self._profiles.list_by_company(profile.company_id), key=lambda p: p.email)
        ]
        return Team(company=company, members=members)

    def list_departments(self) -> Sequence[Department]:
        return self._departments.list_all()
