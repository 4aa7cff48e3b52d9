from __future__ import annotations

from ..common.datetime_utils import Clock, now_local
from ..common.stats import attendance_rate
from ..core.constants import RECENT_SESSIONS_LIMIT
from ..core.enums import AttendanceStatus
from .model import DashboardStats
from .repository import DashboardRepository


class DashboardService:
    """Summary numbers for the dashboard.

    "Today" comes from the injected clock (process local time by default) and
    is compared against session dates at day granularity.
    """

    def __init__(self, dashboard: DashboardRepository, *, clock: Clock = now_local):
        self._dashboard = dashboard
        self._clock = clock

    def get_stats(self) -> DashboardStats:
        today = self._clock().date()
        counts = self._dashboard.load_counts(today=today, recent_limit=RECENT_SESSIONS_LIMIT)

        today_attendance = {status: int(counts.today_by_status.get(status, 0)) for status in AttendanceStatus}

        return DashboardStats(
            total_students=counts.total_students,
            total_sessions=counts.total_sessions,
            today_attendance=today_attendance,
            overall_attendance_rate=attendance_rate(counts.present_records, counts.total_records),
            recent_sessions=list(counts.recent_sessions),
        )
