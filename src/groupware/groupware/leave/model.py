from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date


@dataclass(frozen=True)
class LeaveUsage:
    event_id: str
    label: str
    start: date
    end: date
    business_days: int
    value: float

    @property
    def used(self) -> float:
        return self.business_days * self.value

    def to_dict(self) -> dict:
        return {
            "event_id": self.event_id,
            "label": self.label,
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "business_days": self.business_days,
            "value": self.value,
            "used": self.used,
        }


@dataclass(frozen=True)
class LeaveBalance:
    year: int
    granted: float
    used: float
    remaining: float
    items: list[LeaveUsage] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "year": self.year,
            "granted": self.granted,
            "used": self.used,
            "remaining": self.remaining,
            "items": [i.to_dict() for i in self.items],
        }
