"""Schema and seed loading for the MySQL database.

The connector runs one statement per ``execute``, so SQL files are split
client side. ``CREATE DATABASE`` and ``USE`` statements in a file are skipped;
the target database always comes from settings.
"""

from __future__ import annotations

import logging
import re
from contextlib import closing
from pathlib import Path
from typing import List, Sequence

from .connection import DatabaseConnection

logger = logging.getLogger(__name__)

DATABASE_DIR = Path(__file__).resolve().parent
SCHEMA_PATH = DATABASE_DIR / "schema.sql"
SEED_PATH = DATABASE_DIR / "seed.sql"

# Quoted strings first so ';' and '--' inside literals are kept.
_TOKENS = re.compile(
    r"""'(?:[^'\\]|\\.)*'|"(?:[^"\\]|\\.)*"|--[^\n]*|;|[^'";-]+|['"-]""",
    re.DOTALL,
)
_SKIPPED = re.compile(r"^(CREATE\s+DATABASE|USE)\b", re.IGNORECASE)


def _flush(statements: List[str], parts: Sequence[str]) -> None:
    stmt = "".join(parts).strip()
    if stmt and not _SKIPPED.match(stmt):
        statements.append(stmt)


def split_statements(sql: str) -> List[str]:
    statements: List[str] = []
    current: List[str] = []
    for token in _TOKENS.findall(sql):
        if token.startswith("--"):
            continue
        if token == ";":
            _flush(statements, current)
            current = []
        else:
            current.append(token)
    _flush(statements, current)
    return statements


def _execute_file(db: DatabaseConnection, path: str | Path) -> int:
    statements = split_statements(Path(path).read_text(encoding="utf-8"))
    with closing(db.connect()) as conn:
        cur = conn.cursor()
        for stmt in statements:
            cur.execute(stmt)
        conn.commit()
    return len(statements)


def ensure_database_exists(db: DatabaseConnection) -> None:
    name = db.config.database
    with closing(db.connect(with_database=False)) as conn:
        conn.cursor().execute(
            f"CREATE DATABASE IF NOT EXISTS `{name}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()


def apply_schema(db: DatabaseConnection, *, schema_path: str | Path = SCHEMA_PATH) -> None:
    ensure_database_exists(db)
    count = _execute_file(db, schema_path)
    logger.info("Applied schema %s (%d statements)", schema_path, count)


def apply_seed_sql(db: DatabaseConnection, *, seed_path: str | Path = SEED_PATH) -> None:
    count = _execute_file(db, seed_path)
    logger.info("Applied seed data %s (%d statements)", seed_path, count)


def list_tables(db: DatabaseConnection) -> List[str]:
    with closing(db.connect()) as conn:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return sorted(row[0] for row in cur.fetchall())
