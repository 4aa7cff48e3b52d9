"""Flask CLI commands for preparing the database.

    flask --app app init-db [--seed]
    flask --app app seed-db
    flask --app app show-tables
"""

from __future__ import annotations

import click
from flask import Flask, current_app

from .bootstrap import apply_schema, apply_seed_sql, list_tables
from .connection import DatabaseConnection, DBConfig


def _database() -> DatabaseConnection:
    return DatabaseConnection(DBConfig.from_settings(current_app.config["DB_CONFIG"]))


def register_commands(app: Flask) -> None:
    @app.cli.command("init-db")
    @click.option("--seed/--no-seed", default=False, help="Load seed.sql after the schema.")
    def init_db(seed: bool):
        """Create the database if needed and apply schema.sql."""
        db = _database()
        apply_schema(db)
        if seed:
            apply_seed_sql(db)
        click.echo(f"OK: applied schema -> {db.config.describe()} (tables={len(list_tables(db))})")

    @app.cli.command("seed-db")
    def seed_db():
        """Load the demo roster and sessions from seed.sql."""
        db = _database()
        apply_seed_sql(db)
        click.echo(f"OK: seeded database -> {db.config.describe()}")

    @app.cli.command("show-tables")
    def show_tables():
        for name in list_tables(_database()):
            click.echo(name)
