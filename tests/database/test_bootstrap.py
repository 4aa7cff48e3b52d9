from __future__ import annotations

from pathlib import Path

from src.class_attendance.class_attendance.database import bootstrap, cli
from src.class_attendance.class_attendance.database.bootstrap import SCHEMA_PATH, SEED_PATH, split_statements


def test_split_keeps_semicolons_inside_literals():
    sql = "INSERT INTO t(v) VALUES('a;b');\nINSERT INTO t(v) VALUES(\"c;d\");"

    assert split_statements(sql) == ["INSERT INTO t(v) VALUES('a;b')", 'INSERT INTO t(v) VALUES("c;d")']


def test_split_drops_comments_and_database_switches():
    sql = """
    -- roster tables
    CREATE DATABASE IF NOT EXISTS other;
    USE other;
    CREATE TABLE a (id INT); -- trailing note
    SELECT 'it''s -- not a comment';
    SELECT 5 - 3
    """

    assert split_statements(sql) == [
        "CREATE TABLE a (id INT)",
        "SELECT 'it''s -- not a comment'",
        "SELECT 5 - 3",
    ]


def test_shipped_sql_files_split_cleanly():
    schema = split_statements(SCHEMA_PATH.read_text(encoding="utf-8"))
    seed = split_statements(SEED_PATH.read_text(encoding="utf-8"))

    assert sum(s.upper().startswith("CREATE TABLE") for s in schema) == 3
    assert seed and all(not s.upper().startswith("USE") for s in seed)


def test_sql_files_live_inside_the_package():
    package_dir = Path(bootstrap.__file__).resolve().parent

    assert SCHEMA_PATH.parent == package_dir
    assert SEED_PATH.parent == package_dir


def test_init_db_command_applies_schema_and_seed(app, monkeypatch):
    calls = []
    monkeypatch.setattr(cli, "apply_schema", lambda db: calls.append(("schema", db.config.database)))
    monkeypatch.setattr(cli, "apply_seed_sql", lambda db: calls.append(("seed", db.config.database)))
    monkeypatch.setattr(cli, "list_tables", lambda db: ["attendance_records", "sessions", "students"])

    result = app.test_cli_runner().invoke(args=["init-db", "--seed"])

    assert result.exit_code == 0, result.output
    assert calls == [("schema", "class_attendance_test"), ("seed", "class_attendance_test")]
    assert "tables=3" in result.output


def test_show_tables_command(app, monkeypatch):
    monkeypatch.setattr(cli, "list_tables", lambda db: ["sessions", "students"])

    result = app.test_cli_runner().invoke(args=["show-tables"])

    assert result.output.split() == ["sessions", "students"]
