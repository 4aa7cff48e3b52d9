from __future__ import annotations

from datetime import date, datetime
from typing import Callable

Clock = Callable[[], datetime]


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_local() -> datetime:
    """Default clock for services: process local time."""
    return datetime.now()
