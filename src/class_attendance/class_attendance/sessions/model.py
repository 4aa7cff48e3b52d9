from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime


@dataclass(frozen=True)
class Session:
    """Domain entity: one class meeting."""

    id: int
    name: str
    date: date
    created_at: datetime

    def to_json(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "date": self.date.isoformat(),
            "createdAt": self.created_at.isoformat(),
        }
