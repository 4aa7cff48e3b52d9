from __future__ import annotations

import re
from contextlib import contextmanager
from typing import Any, Dict, List, Optional, Tuple, Union

import mysql.connector
from mysql.connector import errorcode

from ..common.validators import FieldViolation
from ..core.exceptions import ConflictError, StorageError, ValidationError
from .connection import DatabaseConnection

_FK_COLUMN = re.compile(r"FOREIGN KEY \(`(\w+)`\)")
_LIKE_ESCAPE = "!"


def _camel(column: str) -> str:
    head, *rest = column.split("_")
    return head + "".join(part.title() for part in rest)


def translate_integrity_error(
    exc: mysql.connector.IntegrityError, *, path_prefix: Tuple[Union[str, int], ...] = ()
) -> Exception:
    if exc.errno == errorcode.ER_DUP_ENTRY:
        return ConflictError(exc.msg)
    if exc.errno == errorcode.ER_NO_REFERENCED_ROW_2:
        match = _FK_COLUMN.search(exc.msg or "")
        field = _camel(match.group(1)) if match else "id"
        return ValidationError(
            [FieldViolation(path=path_prefix + (field,), message="Referenced record does not exist")]
        )
    return StorageError(str(exc))


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Yield (conn, cursor) inside one transaction.

    Commits when the block exits cleanly and rolls back on any error, so every
    statement issued in the block is applied atomically.
    """

    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as exc:
        raise StorageError(str(exc)) from exc

    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.IntegrityError as exc:
        conn.rollback()
        raise translate_integrity_error(exc) from exc
    except mysql.connector.Error as exc:
        conn.rollback()
        raise StorageError(str(exc)) from exc
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def placeholders(count: int) -> str:
    return ",".join(["%s"] * int(count))


def like_contains(term: str) -> str:
    """LIKE pattern matching ``term`` literally anywhere; pair with ``ESCAPE '!'``."""
    for ch in (_LIKE_ESCAPE, "%", "_"):
        term = term.replace(ch, _LIKE_ESCAPE + ch)
    return f"%{term}%"
