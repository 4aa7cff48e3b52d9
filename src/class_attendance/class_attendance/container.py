from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .common.datetime_utils import Clock, now_local
from .dashboard.mysql_dashboard_repository import MySQLDashboardRepository
from .dashboard.repository import DashboardRepository
from .dashboard.service import DashboardService
from .database.connection import DatabaseConnection
from .sessions.mysql_session_repository import MySQLSessionRepository
from .sessions.repository import SessionRepository
from .sessions.service import SessionService
from .storage.objects import LocalObjectStorage, ObjectStorage
from .students.mysql_student_repository import MySQLStudentRepository
from .students.repository import StudentRepository
from .students.service import StudentService


@dataclass(frozen=True)
class Container:
    students_repo: StudentRepository
    sessions_repo: SessionRepository
    attendance_repo: AttendanceRepository
    dashboard_repo: DashboardRepository
    object_storage: ObjectStorage

    student_service: StudentService
    session_service: SessionService
    attendance_service: AttendanceService
    dashboard_service: DashboardService


def wire_container(
    *,
    students_repo: StudentRepository,
    sessions_repo: SessionRepository,
    attendance_repo: AttendanceRepository,
    dashboard_repo: DashboardRepository,
    object_storage: ObjectStorage,
    clock: Clock = now_local,
) -> Container:
    """Build services on top of any set of repositories (MySQL or test doubles)."""

    return Container(
        students_repo=students_repo,
        sessions_repo=sessions_repo,
        attendance_repo=attendance_repo,
        dashboard_repo=dashboard_repo,
        object_storage=object_storage,
        student_service=StudentService(students_repo),
        session_service=SessionService(sessions_repo),
        attendance_service=AttendanceService(attendance_repo, sessions_repo, clock=clock),
        dashboard_service=DashboardService(dashboard_repo, clock=clock),
    )


def build_container(
    *,
    db: DatabaseConnection,
    object_storage_dir: str | Path,
    public_base_url: str = "",
    clock: Clock = now_local,
) -> Container:
    return wire_container(
        students_repo=MySQLStudentRepository(db),
        sessions_repo=MySQLSessionRepository(db),
        attendance_repo=MySQLAttendanceRepository(db),
        dashboard_repo=MySQLDashboardRepository(db),
        object_storage=LocalObjectStorage(object_storage_dir, public_base_url=public_base_url),
        clock=clock,
    )
