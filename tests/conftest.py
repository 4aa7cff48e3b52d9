from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Mapping, Optional, Sequence

import pytest

from src.class_attendance.class_attendance.attendance.model import (
    AttendanceFilter,
    AttendanceRecord,
    AttendanceRecordDetail,
    NewAttendanceRecord,
)
from src.class_attendance.class_attendance.common.stats import attendance_rate
from src.class_attendance.class_attendance.common.validators import FieldViolation
from src.class_attendance.class_attendance.container import wire_container
from src.class_attendance.class_attendance.core.enums import AttendanceStatus
from src.class_attendance.class_attendance.core.exceptions import ConflictError, StorageError, ValidationError
from src.class_attendance.class_attendance.dashboard.model import DashboardCounts
from src.class_attendance.class_attendance.sessions.model import Session
from src.class_attendance.class_attendance.storage.objects import LocalObjectStorage
from src.class_attendance.class_attendance.students.model import Student, StudentStats


class InMemoryDatabase:
    """Tables as dicts keyed by surrogate id; mirrors the FK/unique rules of schema.sql."""

    def __init__(self, clock):
        self.clock = clock
        self.students: dict[int, Student] = {}
        self.sessions: dict[int, Session] = {}
        self.records: dict[int, AttendanceRecord] = {}
        self._last_ids = {"students": 0, "sessions": 0, "records": 0}

    def next_id(self, table: str) -> int:
        self._last_ids[table] += 1
        return self._last_ids[table]

    def check_references(self, record: NewAttendanceRecord, prefix: tuple = ()) -> None:
        if record.student_id not in self.students:
            raise ValidationError([FieldViolation(path=prefix + ("studentId",), message="Referenced record does not exist")])
        if record.session_id not in self.sessions:
            raise ValidationError([FieldViolation(path=prefix + ("sessionId",), message="Referenced record does not exist")])

    def insert_record(self, record: NewAttendanceRecord) -> AttendanceRecord:
        rec = AttendanceRecord(
            id=self.next_id("records"),
            student_id=record.student_id,
            session_id=record.session_id,
            status=record.status,
            notes=record.notes,
            recorded_at=self.clock(),
        )
        self.records[rec.id] = rec
        return rec

    def drop_records(self, *, student_id: Optional[int] = None, session_id: Optional[int] = None) -> None:
        for rid, r in list(self.records.items()):
            if r.student_id == student_id or r.session_id == session_id:
                del self.records[rid]


def _student_order(s: Student):
    return (s.last_name, s.first_name, s.id)


def _sessions_desc(sessions) -> list[Session]:
    return sorted(sorted(sessions, key=lambda s: s.id), key=lambda s: s.date, reverse=True)


class InMemoryStudents:
    def __init__(self, db: InMemoryDatabase):
        self._db = db

    def list_all(self, *, search: Optional[str] = None) -> Sequence[Student]:
        items = list(self._db.students.values())
        if search:
            needle = search.lower()
            items = [
                s
                for s in items
                if any(needle in v.lower() for v in (s.first_name, s.last_name, s.student_id, s.email))
            ]
        return sorted(items, key=_student_order)

    def get_by_id(self, student_id: int) -> Optional[Student]:
        return self._db.students.get(student_id)

    def _ensure_unique(self, student_id: str, *, ignore_id: Optional[int] = None) -> None:
        for s in self._db.students.values():
            if s.student_id == student_id and s.id != ignore_id:
                raise ConflictError(f"Student ID {student_id!r} already exists")

    def create(self, *, student_id, first_name, last_name, email, photo_url=None) -> Student:
        self._ensure_unique(student_id)
        student = Student(
            id=self._db.next_id("students"),
            student_id=student_id,
            first_name=first_name,
            last_name=last_name,
            email=email,
            photo_url=photo_url,
        )
        self._db.students[student.id] = student
        return student

    def update(self, student_id: int, changes: Mapping[str, object]) -> Optional[Student]:
        current = self._db.students.get(student_id)
        if not current:
            return None
        if "student_id" in changes:
            self._ensure_unique(str(changes["student_id"]), ignore_id=student_id)
        updated = replace(current, **dict(changes))
        self._db.students[student_id] = updated
        return updated

    def delete(self, student_id: int) -> bool:
        if self._db.students.pop(student_id, None) is None:
            return False
        self._db.drop_records(student_id=student_id)
        return True

    def list_stats(self) -> Sequence[StudentStats]:
        out = []
        for s in self.list_all():
            mine = [r for r in self._db.records.values() if r.student_id == s.id]
            by_status = {st: sum(1 for r in mine if r.status == st) for st in AttendanceStatus}
            out.append(
                StudentStats(
                    student=s,
                    total_classes=len(mine),
                    present_count=by_status[AttendanceStatus.PRESENT],
                    absent_count=by_status[AttendanceStatus.ABSENT],
                    late_count=by_status[AttendanceStatus.LATE],
                    excused_count=by_status[AttendanceStatus.EXCUSED],
                    attendance_rate=attendance_rate(by_status[AttendanceStatus.PRESENT], len(mine)),
                )
            )
        return out


class InMemorySessions:
    def __init__(self, db: InMemoryDatabase):
        self._db = db

    def list_all(self) -> Sequence[Session]:
        return _sessions_desc(self._db.sessions.values())

    def list_recent(self, limit: int) -> Sequence[Session]:
        return self.list_all()[:limit]

    def get_by_id(self, session_id: int) -> Optional[Session]:
        return self._db.sessions.get(session_id)

    def create(self, *, name: str, session_date: date) -> Session:
        session = Session(id=self._db.next_id("sessions"), name=name, date=session_date, created_at=self._db.clock())
        self._db.sessions[session.id] = session
        return session

    def delete(self, session_id: int) -> bool:
        if self._db.sessions.pop(session_id, None) is None:
            return False
        self._db.drop_records(session_id=session_id)
        return True


class InMemoryAttendance:
    def __init__(self, db: InMemoryDatabase):
        self._db = db

    def _matches(self, d: AttendanceRecordDetail, f: Optional[AttendanceFilter]) -> bool:
        if f is None:
            return True
        if f.status is not None and d.record.status != f.status:
            return False
        if f.session_id is not None and d.record.session_id != f.session_id:
            return False
        if f.start_date is not None and d.session.date < f.start_date:
            return False
        if f.end_date is not None and d.session.date > f.end_date:
            return False
        if f.search:
            needle = f.search.lower()
            fields = (d.student.first_name, d.student.last_name, d.student.student_id)
            if not any(needle in v.lower() for v in fields):
                return False
        return True

    def list_details(self, filters: Optional[AttendanceFilter] = None) -> Sequence[AttendanceRecordDetail]:
        details = []
        for r in sorted(self._db.records.values(), key=lambda r: r.id):
            student = self._db.students.get(r.student_id)
            session = self._db.sessions.get(r.session_id)
            if student is None or session is None:
                continue
            d = AttendanceRecordDetail(record=r, student=student, session=session)
            if self._matches(d, filters):
                details.append(d)
        details.sort(key=lambda d: d.student.last_name)
        details.sort(key=lambda d: d.session.date, reverse=True)
        return details

    def list_by_session(self, session_id: int) -> Sequence[AttendanceRecord]:
        return [r for r in sorted(self._db.records.values(), key=lambda r: r.id) if r.session_id == session_id]

    def create(self, record: NewAttendanceRecord) -> AttendanceRecord:
        self._db.check_references(record)
        return self._db.insert_record(record)

    def replace_for_session(self, records: Sequence[NewAttendanceRecord]) -> Sequence[AttendanceRecord]:
        if not records:
            return []
        # Check everything up front so a failure leaves the session untouched, like a rolled back transaction.
        for index, r in enumerate(records):
            self._db.check_references(r, prefix=("records", index))
        self._db.drop_records(session_id=records[0].session_id)
        return [self._db.insert_record(r) for r in records]


class InMemoryDashboard:
    def __init__(self, db: InMemoryDatabase):
        self._db = db

    def load_counts(self, *, today: date, recent_limit: int) -> DashboardCounts:
        today_by_status: dict[AttendanceStatus, int] = {}
        for r in self._db.records.values():
            session = self._db.sessions.get(r.session_id)
            if session is not None and session.date == today:
                today_by_status[r.status] = today_by_status.get(r.status, 0) + 1

        records = list(self._db.records.values())
        return DashboardCounts(
            total_students=len(self._db.students),
            total_sessions=len(self._db.sessions),
            today_by_status=today_by_status,
            total_records=len(records),
            present_records=sum(1 for r in records if r.status == AttendanceStatus.PRESENT),
            recent_sessions=_sessions_desc(self._db.sessions.values())[:recent_limit],
        )


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2024, 1, 10, 9, 30, 0)


@pytest.fixture
def db(fixed_now) -> InMemoryDatabase:
    return InMemoryDatabase(clock=lambda: fixed_now)


@pytest.fixture
def container(db, fixed_now, tmp_path):
    return wire_container(
        students_repo=InMemoryStudents(db),
        sessions_repo=InMemorySessions(db),
        attendance_repo=InMemoryAttendance(db),
        dashboard_repo=InMemoryDashboard(db),
        object_storage=LocalObjectStorage(tmp_path / "objects", public_base_url="http://testserver"),
        clock=lambda: fixed_now,
    )


@pytest.fixture
def app(container, monkeypatch):
    from src.class_attendance.class_attendance.main import create_app

    monkeypatch.setenv("APP_ENV", "testing")
    flask_app = create_app(container)
    flask_app.config["TESTING"] = True
    return flask_app


@pytest.fixture
def client(app):
    return app.test_client()


class BrokenStudents:
    def list_all(self, *, search=None):
        raise StorageError("connection lost")


@pytest.fixture
def broken_client(db, fixed_now, tmp_path, monkeypatch):
    from src.class_attendance.class_attendance.main import create_app

    monkeypatch.setenv("APP_ENV", "testing")
    broken = wire_container(
        students_repo=BrokenStudents(),
        sessions_repo=InMemorySessions(db),
        attendance_repo=InMemoryAttendance(db),
        dashboard_repo=InMemoryDashboard(db),
        object_storage=LocalObjectStorage(tmp_path),
        clock=lambda: fixed_now,
    )
    return create_app(broken).test_client()


@pytest.fixture
def relative_storage_client(db, fixed_now, tmp_path, monkeypatch):
    """App whose object storage is configured as ``var/objects`` like the shipped settings."""
    from src.class_attendance.class_attendance.main import create_app

    monkeypatch.setenv("APP_ENV", "testing")
    monkeypatch.chdir(tmp_path)
    wired = wire_container(
        students_repo=InMemoryStudents(db),
        sessions_repo=InMemorySessions(db),
        attendance_repo=InMemoryAttendance(db),
        dashboard_repo=InMemoryDashboard(db),
        object_storage=LocalObjectStorage("var/objects", public_base_url="http://testserver"),
        clock=lambda: fixed_now,
    )
    return create_app(wired).test_client()


@pytest.fixture
def make_student(container):
    counter = {"n": 0}

    def _make(**overrides) -> Student:
        counter["n"] += 1
        payload = {
            "studentId": f"S{counter['n']:03d}",
            "firstName": f"First{counter['n']}",
            "lastName": f"Last{counter['n']}",
            "email": f"student{counter['n']}@school.edu",
        }
        payload.update(overrides)
        return container.student_service.create_student(payload)

    return _make


@pytest.fixture
def make_session(container):
    def _make(name: str = "Lecture", on: str = "2024-01-10") -> Session:
        return container.session_service.create_session({"name": name, "date": on})

    return _make
