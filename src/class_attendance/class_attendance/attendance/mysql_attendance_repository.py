from __future__ import annotations

from typing import Optional, Sequence

import mysql.connector

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import (
    db_cursor,
    fetchall,
    fetchone,
    like_contains,
    placeholders,
    translate_integrity_error,
)
from ..sessions.mysql_session_repository import row_to_session
from ..students.model import Student
from .model import AttendanceFilter, AttendanceRecord, AttendanceRecordDetail, NewAttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = "ar.id, ar.student_id, ar.session_id, ar.status, ar.notes, ar.recorded_at"


def _row_to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        id=int(r["id"]),
        student_id=int(r["student_id"]),
        session_id=int(r["session_id"]),
        status=AttendanceStatus(r["status"]),
        notes=r.get("notes"),
        recorded_at=r["recorded_at"],
    )


def _insert(cur, record: NewAttendanceRecord) -> int:
    cur.execute(
        """
        INSERT INTO attendance_records(student_id, session_id, status, notes)
        VALUES(%s,%s,%s,%s)
        """,
        (record.student_id, record.session_id, record.status.value, record.notes),
    )
    return int(cur.lastrowid)


def _select_by_ids(cur, ids: Sequence[int]) -> list[AttendanceRecord]:
    cur.execute(
        f"SELECT {_COLUMNS} FROM attendance_records ar WHERE ar.id IN ({placeholders(len(ids))})",
        tuple(ids),
    )
    by_id = {int(r["id"]): _row_to_record(r) for r in fetchall(cur)}
    return [by_id[i] for i in ids]


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_details(self, filters: Optional[AttendanceFilter] = None) -> Sequence[AttendanceRecordDetail]:
        clauses: list[str] = []
        params: list[object] = []

        if filters is not None:
            if filters.status is not None:
                clauses.append("ar.status=%s")
                params.append(filters.status.value)
            if filters.session_id is not None:
                clauses.append("ar.session_id=%s")
                params.append(int(filters.session_id))
            if filters.start_date is not None:
                clauses.append("se.date >= %s")
                params.append(filters.start_date)
            if filters.end_date is not None:
                clauses.append("se.date <= %s")
                params.append(filters.end_date)
            if filters.search:
                like = like_contains(filters.search.lower())
                clauses.append(
                    "(LOWER(st.first_name) LIKE %s ESCAPE '!' OR LOWER(st.last_name) LIKE %s ESCAPE '!' "
                    "OR LOWER(st.student_id) LIKE %s ESCAPE '!')"
                )
                params.extend([like, like, like])

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT
                    {_COLUMNS},
                    st.id AS st_id, st.student_id AS st_student_id, st.first_name AS st_first_name,
                    st.last_name AS st_last_name, st.email AS st_email, st.photo_url AS st_photo_url,
                    se.id AS se_id, se.name AS se_name, se.date AS se_date, se.created_at AS se_created_at
                FROM attendance_records ar
                JOIN students st ON st.id = ar.student_id
                JOIN sessions se ON se.id = ar.session_id
                {where}
                ORDER BY se.date DESC, st.last_name COLLATE utf8mb4_bin ASC, ar.id ASC
                """,
                tuple(params),
            )
            rows = fetchall(cur)

        return [
            AttendanceRecordDetail(
                record=_row_to_record(r),
                student=Student(
                    id=int(r["st_id"]),
                    student_id=r["st_student_id"],
                    first_name=r["st_first_name"],
                    last_name=r["st_last_name"],
                    email=r["st_email"],
                    photo_url=r.get("st_photo_url"),
                ),
                session=row_to_session(r, prefix="se_"),
            )
            for r in rows
        ]

    def list_by_session(self, session_id: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records ar WHERE ar.session_id=%s ORDER BY ar.id",
                (int(session_id),),
            )
            return [_row_to_record(r) for r in fetchall(cur)]

    def create(self, record: NewAttendanceRecord) -> AttendanceRecord:
        with db_cursor(self._conn_factory) as (_, cur):
            new_id = _insert(cur, record)
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_records ar WHERE ar.id=%s", (new_id,))
            return _row_to_record(fetchone(cur))

    def replace_for_session(self, records: Sequence[NewAttendanceRecord]) -> Sequence[AttendanceRecord]:
        if not records:
            return []

        session_id = records[0].session_id
        # One transaction: if any insert fails the delete is rolled back too.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendance_records WHERE session_id=%s", (int(session_id),))
            new_ids = []
            for index, record in enumerate(records):
                try:
                    new_ids.append(_insert(cur, record))
                except mysql.connector.IntegrityError as exc:
                    raise translate_integrity_error(exc, path_prefix=("records", index)) from exc
            return _select_by_ids(cur, new_ids)
