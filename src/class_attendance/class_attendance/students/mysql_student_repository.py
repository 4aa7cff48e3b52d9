from __future__ import annotations

from typing import Mapping, Optional, Sequence

from ..common.stats import attendance_rate
from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, like_contains
from .model import Student, StudentStats
from .repository import StudentRepository

_COLUMNS = "s.id, s.student_id, s.first_name, s.last_name, s.email, s.photo_url"
_ORDER = "s.last_name COLLATE utf8mb4_bin, s.first_name COLLATE utf8mb4_bin, s.id"
_UPDATABLE = ("student_id", "first_name", "last_name", "email", "photo_url")


def _row_to_student(r: dict) -> Student:
    return Student(
        id=int(r["id"]),
        student_id=r["student_id"],
        first_name=r["first_name"],
        last_name=r["last_name"],
        email=r["email"],
        photo_url=r.get("photo_url"),
    )


class MySQLStudentRepository(StudentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self, *, search: Optional[str] = None) -> Sequence[Student]:
        where = ""
        params: list[object] = []
        if search:
            like = like_contains(search.lower())
            where = (
                "WHERE LOWER(s.first_name) LIKE %s ESCAPE '!' OR LOWER(s.last_name) LIKE %s ESCAPE '!' "
                "OR LOWER(s.student_id) LIKE %s ESCAPE '!' OR LOWER(s.email) LIKE %s ESCAPE '!'"
            )
            params = [like, like, like, like]

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM students s {where} ORDER BY {_ORDER}", tuple(params))
            return [_row_to_student(r) for r in fetchall(cur)]

    def get_by_id(self, student_id: int) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM students s WHERE s.id=%s", (int(student_id),))
            row = fetchone(cur)
            return _row_to_student(row) if row else None

    def create(
        self,
        *,
        student_id: str,
        first_name: str,
        last_name: str,
        email: str,
        photo_url: Optional[str] = None,
    ) -> Student:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO students(student_id, first_name, last_name, email, photo_url)
                    VALUES(%s,%s,%s,%s,%s)
                    """,
                    (student_id, first_name, last_name, email, photo_url),
                )
                new_id = int(cur.lastrowid)
                cur.execute(f"SELECT {_COLUMNS} FROM students s WHERE s.id=%s", (new_id,))
                return _row_to_student(fetchone(cur))
        except ConflictError:
            raise ConflictError(f"Student ID {student_id!r} already exists") from None

    def update(self, student_id: int, changes: Mapping[str, object]) -> Optional[Student]:
        columns = [c for c in _UPDATABLE if c in changes]
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                if columns:
                    assignments = ", ".join(f"{c}=%s" for c in columns)
                    cur.execute(
                        f"UPDATE students SET {assignments} WHERE id=%s",
                        tuple(changes[c] for c in columns) + (int(student_id),),
                    )
                cur.execute(f"SELECT {_COLUMNS} FROM students s WHERE s.id=%s", (int(student_id),))
                row = fetchone(cur)
                return _row_to_student(row) if row else None
        except ConflictError:
            raise ConflictError(f"Student ID {changes.get('student_id')!r} already exists") from None

    def delete(self, student_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM students WHERE id=%s", (int(student_id),))
            return cur.rowcount > 0

    def list_stats(self) -> Sequence[StudentStats]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT
                    {_COLUMNS},
                    COUNT(ar.id) AS total_classes,
                    COALESCE(SUM(ar.status = 'present'), 0) AS present_count,
                    COALESCE(SUM(ar.status = 'absent'), 0) AS absent_count,
                    COALESCE(SUM(ar.status = 'late'), 0) AS late_count,
                    COALESCE(SUM(ar.status = 'excused'), 0) AS excused_count
                FROM students s
                LEFT JOIN attendance_records ar ON ar.student_id = s.id
                GROUP BY s.id
                ORDER BY {_ORDER}
                """
            )
            rows = fetchall(cur)

        return [
            StudentStats(
                student=_row_to_student(r),
                total_classes=int(r["total_classes"]),
                present_count=int(r["present_count"]),
                absent_count=int(r["absent_count"]),
                late_count=int(r["late_count"]),
                excused_count=int(r["excused_count"]),
                attendance_rate=attendance_rate(int(r["present_count"]), int(r["total_classes"])),
            )
            for r in rows
        ]
