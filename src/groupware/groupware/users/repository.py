from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Profile


class ProfileRepository(Protocol):
    """Repository interface for profiles.

    Services depend on this interface, never on a concrete database.
    """

    def get_by_id(self, user_id: str) -> Optional[Profile]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[Profile]:
        raise NotImplementedError

    def create_profile(
        self,
        *,
        email: str,
        full_name: Optional[str],
        password_hash: str,
        company_id: Optional[str],
    ) -> str:
        raise NotImplementedError

    def update_password_hash(self, user_id: str, *, password_hash: str) -> bool:
        raise NotImplementedError

    def update_full_name(self, user_id: str, *, full_name: Optional[str]) -> bool:
        raise NotImplementedError

    def update_work_settings(
        self,
        user_id: str,
        *,
        weekly_work_hours: int,
        weekly_work_start: str,
        weekly_work_end: str,
    ) -> bool:
        raise NotImplementedError

    def set_company(self, user_id: str, *, company_id: Optional[str]) -> bool:
        raise NotImplementedError

    def list_by_company(self, company_id: str) -> Sequence[Profile]:
        raise NotImplementedError
