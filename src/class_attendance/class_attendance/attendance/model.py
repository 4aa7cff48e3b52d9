from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus
from ..sessions.model import Session
from ..students.model import Student


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: a student's status at one session."""

    id: int
    student_id: int
    session_id: int
    status: AttendanceStatus
    notes: Optional[str]
    recorded_at: datetime

    def to_json(self) -> dict:
        return {
            "id": self.id,
            "studentId": self.student_id,
            "sessionId": self.session_id,
            "status": self.status.value,
            "notes": self.notes,
            "recordedAt": self.recorded_at.isoformat(),
        }


@dataclass(frozen=True)
class NewAttendanceRecord:
    """Validated write-model for one record (no id, no timestamp yet)."""

    student_id: int
    session_id: int
    status: AttendanceStatus
    notes: Optional[str] = None


@dataclass(frozen=True)
class AttendanceRecordDetail:
    """Read-model: a record joined with its student and session."""

    record: AttendanceRecord
    student: Student
    session: Session

    def to_json(self) -> dict:
        return {
            **self.record.to_json(),
            "student": self.student.to_json(),
            "session": self.session.to_json(),
        }


@dataclass(frozen=True)
class AttendanceFilter:
    status: Optional[AttendanceStatus] = None
    session_id: Optional[int] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    search: Optional[str] = None
