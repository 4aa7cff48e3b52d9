from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Session
from .repository import SessionRepository

SESSION_COLUMNS = "se.id, se.name, se.date, se.created_at"
SESSION_ORDER = "se.date DESC, se.id ASC"


def row_to_session(r: dict, prefix: str = "") -> Session:
    return Session(
        id=int(r[f"{prefix}id"]),
        name=r[f"{prefix}name"],
        date=r[f"{prefix}date"],
        created_at=r[f"{prefix}created_at"],
    )


class MySQLSessionRepository(SessionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Session]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {SESSION_COLUMNS} FROM sessions se ORDER BY {SESSION_ORDER}")
            return [row_to_session(r) for r in fetchall(cur)]

    def list_recent(self, limit: int) -> Sequence[Session]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {SESSION_COLUMNS} FROM sessions se ORDER BY {SESSION_ORDER} LIMIT %s",
                (int(limit),),
            )
            return [row_to_session(r) for r in fetchall(cur)]

    def get_by_id(self, session_id: int) -> Optional[Session]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {SESSION_COLUMNS} FROM sessions se WHERE se.id=%s", (int(session_id),))
            row = fetchone(cur)
            return row_to_session(row) if row else None

    def create(self, *, name: str, session_date: date) -> Session:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("INSERT INTO sessions(name, date) VALUES(%s,%s)", (name, session_date))
            new_id = int(cur.lastrowid)
            cur.execute(f"SELECT {SESSION_COLUMNS} FROM sessions se WHERE se.id=%s", (new_id,))
            return row_to_session(fetchone(cur))

    def delete(self, session_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM sessions WHERE id=%s", (int(session_id),))
            return cur.rowcount > 0
