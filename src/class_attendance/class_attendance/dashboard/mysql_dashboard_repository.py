from __future__ import annotations

from datetime import date

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from ..sessions.mysql_session_repository import SESSION_COLUMNS, SESSION_ORDER, row_to_session
from .model import DashboardCounts
from .repository import DashboardRepository


class MySQLDashboardRepository(DashboardRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def load_counts(self, *, today: date, recent_limit: int) -> DashboardCounts:
        with db_cursor(self._conn_factory) as (conn, cur):
            # All reads below see the same InnoDB snapshot.
            conn.start_transaction(consistent_snapshot=True, readonly=True)

            cur.execute("SELECT COUNT(*) AS n FROM students")
            total_students = int(fetchone(cur)["n"])

            cur.execute("SELECT COUNT(*) AS n FROM sessions")
            total_sessions = int(fetchone(cur)["n"])

            cur.execute(
                """
                SELECT ar.status, COUNT(*) AS n
                FROM attendance_records ar
                JOIN sessions se ON se.id = ar.session_id
                WHERE se.date = %s
                GROUP BY ar.status
                """,
                (today,),
            )
            today_by_status = {AttendanceStatus(r["status"]): int(r["n"]) for r in fetchall(cur)}

            cur.execute(
                """
                SELECT COUNT(*) AS total, COALESCE(SUM(status = 'present'), 0) AS present
                FROM attendance_records
                """
            )
            totals = fetchone(cur)

            cur.execute(
                f"SELECT {SESSION_COLUMNS} FROM sessions se ORDER BY {SESSION_ORDER} LIMIT %s",
                (int(recent_limit),),
            )
            recent = [row_to_session(r) for r in fetchall(cur)]

        return DashboardCounts(
            total_students=total_students,
            total_sessions=total_sessions,
            today_by_status=today_by_status,
            total_records=int(totals["total"]),
            present_records=int(totals["present"]),
            recent_sessions=recent,
        )
