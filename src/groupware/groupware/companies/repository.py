from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Company, Department


class CompanyRepository(Protocol):
    def get_by_id(self, company_id: str) -> Optional[Company]:
        raise NotImplementedError

    def get_by_accept_code(self, accept_code: str) -> Optional[Company]:
        raise NotImplementedError

    def create_company(
        self,
        *,
        name: str,
        description: Optional[str],
        accept_code: str,
        admin_id: Optional[str],
    ) -> Company:
        raise NotImplementedError

    def list_all(self) -> Sequence[Company]:
        """Newest first."""
        raise NotImplementedError


class DepartmentRepository(Protocol):
    def list_all(self) -> Sequence[Department]:
        raise NotImplementedError
