from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Student:
    """Domain entity: a student on the roster."""

    id: int
    student_id: str
    first_name: str
    last_name: str
    email: str
    photo_url: Optional[str] = None

    def to_json(self) -> dict:
        return {
            "id": self.id,
            "studentId": self.student_id,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "email": self.email,
            "photoUrl": self.photo_url,
        }


@dataclass(frozen=True)
class StudentStats:
    """Read-model: a student with attendance totals across all sessions."""

    student: Student
    total_classes: int
    present_count: int
    absent_count: int
    late_count: int
    excused_count: int
    attendance_rate: int

    def to_json(self) -> dict:
        return {
            **self.student.to_json(),
            "totalClasses": self.total_classes,
            "presentCount": self.present_count,
            "absentCount": self.absent_count,
            "lateCount": self.late_count,
            "excusedCount": self.excused_count,
            "attendanceRate": self.attendance_rate,
        }
