from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import blank_to_none, require_email, require_min_length
from ..companies.repository import CompanyRepository
from ..core.constants import KOREAN_WEEKDAYS, MIN_PASSWORD_LENGTH
from ..core.exceptions import AuthenticationError, ConflictError, NotFoundError, ValidationError
from .model import Profile, WorkSettings
from .repository import ProfileRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionUser:
    """What we store into Flask session after login."""

    user_id: str
    email: str
    full_name: Optional[str]
    is_admin: bool
    company_id: Optional[str]

    @classmethod
    def from_profile(cls, profile: Profile) -> "SessionUser":
        return cls(
            user_id=profile.id,
            email=profile.email,
            full_name=profile.full_name,
            is_admin=profile.is_admin,
            company_id=profile.company_id,
        )


class AuthService:
    """Use cases: sign up, log in, change password."""

    def __init__(self, profiles: ProfileRepository, companies: CompanyRepository):
        self._profiles = profiles
        self._companies = companies

    def sign_up(self, *, email: str, password: str, full_name: str = "", accept_code: str = "") -> SessionUser:
        email = require_email(email)
        require_min_length(password, "비밀번호", MIN_PASSWORD_LENGTH)

        company_id = None
        code = (accept_code or "").strip().upper()
        if code:
            company = self._companies.get_by_accept_code(code)
            if not company:
                raise ValidationError("유효하지 않은 회사 코드입니다.")
            company_id = company.id

        if self._profiles.get_by_email(email):
            raise ConflictError("이미 가입된 이메일입니다.")

        user_id = self._profiles.create_profile(
            email=email,
            full_name=blank_to_none(full_name),
            password_hash=generate_password_hash(password),
            company_id=company_id,
        )
        logger.info("profile created user_id=%s company_id=%s", user_id, company_id)

        profile = self._profiles.get_by_id(user_id)
        if not profile:
            raise NotFoundError("프로필을 찾을 수 없습니다")
        return SessionUser.from_profile(profile)

    def authenticate(self, email: str, password: str) -> SessionUser:
        profile = self._profiles.get_by_email((email or "").strip().lower())
        if not profile:
            raise AuthenticationError("이메일 또는 비밀번호가 올바르지 않습니다.")

        try:
            ok = check_password_hash(profile.password_hash, password or "")
        except ValueError:
            # placeholder or corrupted hash values
            ok = False

        if not ok:
            raise AuthenticationError("이메일 또는 비밀번호가 올바르지 않습니다.")

        return SessionUser.from_profile(profile)

    def session_user_for(self, user_id: str) -> SessionUser:
        profile = self._profiles.get_by_id(user_id)
        if not profile:
            raise NotFoundError("프로필을 찾을 수 없습니다")
        return SessionUser.from_profile(profile)

    def change_password(self, user_id: str, *, new_password: str, confirm_password: str) -> None:
        if not new_password or len(new_password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"비밀번호는 최소 {MIN_PASSWORD_LENGTH}자리 이상이어야 합니다.")
        if new_password != confirm_password:
            raise ValidationError("비밀번호가 일치하지 않습니다.")

        if not self._profiles.update_password_hash(user_id, password_hash=generate_password_hash(new_password)):
            raise NotFoundError("프로필을 찾을 수 없습니다")
        logger.info("password changed user_id=%s", user_id)


class ProfileService:
    """Use cases: view and edit one's own profile and work settings."""

    def __init__(self, profiles: ProfileRepository):
        self._profiles = profiles

    def get(self, user_id: str) -> Profile:
        profile = self._profiles.get_by_id(user_id)
        if not profile:
            raise NotFoundError("프로필을 찾을 수 없습니다")
        return profile

    def update_full_name(self, user_id: str, full_name: Optional[str]) -> Profile:
        self.get(user_id)
        self._profiles.update_full_name(user_id, full_name=blank_to_none(full_name))
        return self.get(user_id)

    def get_work_settings(self, user_id: str) -> WorkSettings:
        profile = self.get(user_id)
        return WorkSettings(
            weekly_work_hours=profile.weekly_work_hours,
            weekly_work_start=profile.weekly_work_start,
            weekly_work_end=profile.weekly_work_end,
        )

    def update_work_settings(
        self,
        user_id: str,
        *,
        weekly_work_hours: int,
        weekly_work_start: str,
        weekly_work_end: str,
    ) -> WorkSettings:
        try:
            hours = int(weekly_work_hours)
        except (TypeError, ValueError):
            raise ValidationError("주간 근무시간은 숫자여야 합니다.")
        if hours < 1 or hours > 100:
            raise ValidationError("주간 근무시간은 1~100 사이여야 합니다.")
        if weekly_work_start not in KOREAN_WEEKDAYS or weekly_work_end not in KOREAN_WEEKDAYS:
            raise ValidationError("요일 값이 올바르지 않습니다.")

        self.get(user_id)
        self._profiles.update_work_settings(
            user_id,
            weekly_work_hours=hours,
            weekly_work_start=weekly_work_start,
            weekly_work_end=weekly_work_end,
        )
        return WorkSettings(hours, weekly_work_start, weekly_work_end)
