from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import BiometricCredential


class BiometricCredentialRepository(Protocol):
    def get_by_credential_id(self, credential_id: str) -> Optional[BiometricCredential]:
        raise NotImplementedError

    def list_for_user(self, user_id: str) -> Sequence[BiometricCredential]:
        raise NotImplementedError

    def create_credential(
        self, *, user_id: str, credential_id: str, public_key: str, sign_count: int
    ) -> BiometricCredential:
        raise NotImplementedError

    def update_sign_count(self, credential_pk: str, *, sign_count: int) -> bool:
        raise NotImplementedError

    def delete_for_user(self, user_id: str) -> int:
        raise NotImplementedError

    def table_exists(self) -> bool:
        raise NotImplementedError
