from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Closed set of statuses an attendance record can carry."""

    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"
    EXCUSED = "excused"
