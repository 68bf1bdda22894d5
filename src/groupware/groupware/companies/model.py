from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Company:
    id: str
    name: str
    description: Optional[str]
    accept_code: str
    admin_id: Optional[str] = None
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "accept_code": self.accept_code,
            "admin_id": self.admin_id,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


@dataclass(frozen=True)
class Department:
    id: str
    name: str


@dataclass(frozen=True)
class TeamMember:
    id: str
    email: str
    full_name: Optional[str]


@dataclass(frozen=True)
class Team:
    company: Optional[Company]
    members: list[TeamMember] = field(default_factory=list)
