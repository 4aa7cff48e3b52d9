from __future__ import annotations

from datetime import date
from typing import Protocol

from .model import DashboardCounts


class DashboardRepository(Protocol):
    def load_counts(self, *, today: date, recent_limit: int) -> DashboardCounts:
        """Read every dashboard aggregate from one consistent view of the data."""

        raise NotImplementedError
