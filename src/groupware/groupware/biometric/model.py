from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class BiometricCredential:
    id: str
    user_id: str
    credential_id: str
    public_key: str
    sign_count: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "credential_id": self.credential_id,
            "sign_count": self.sign_count,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
