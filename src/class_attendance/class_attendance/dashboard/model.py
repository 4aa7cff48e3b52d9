from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Sequence

from ..core.enums import AttendanceStatus
from ..sessions.model import Session


@dataclass(frozen=True)
class DashboardCounts:
    """Raw aggregates read in one snapshot; the service derives rates from them."""

    total_students: int
    total_sessions: int
    today_by_status: Dict[AttendanceStatus, int]
    total_records: int
    present_records: int
    recent_sessions: Sequence[Session] = field(default_factory=tuple)


@dataclass(frozen=True)
class DashboardStats:
    total_students: int
    total_sessions: int
    today_attendance: Dict[AttendanceStatus, int]
    overall_attendance_rate: int
    recent_sessions: Sequence[Session]

    def to_json(self) -> dict:
        return {
            "totalStudents": self.total_students,
            "totalSessions": self.total_sessions,
            "todayAttendance": {s.value: n for s, n in self.today_attendance.items()},
            "overallAttendanceRate": self.overall_attendance_rate,
            "recentSessions": [s.to_json() for s in self.recent_sessions],
        }
