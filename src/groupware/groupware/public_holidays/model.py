from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class Holiday:
    date: date
    name: str

    def to_dict(self) -> dict:
        return {"date": self.date.isoformat(), "name": self.name}
