from __future__ import annotations

import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from config import get_settings_module, load_settings

from .attendance.controller import register as register_attendance
from .container import Container, build_container
from .dashboard.controller import register as register_dashboard
from .database.bootstrap import apply_schema, apply_seed_sql, list_tables
from .database.cli import register_commands
from .database.connection import DatabaseConnection, DBConfig
from .sessions.controller import register as register_sessions
from .storage.controller import register as register_storage
from .students.controller import register as register_students

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(HTTPException)
    def http_error(exc: HTTPException):
        return jsonify({"error": exc.description or exc.name}), exc.code

    @app.errorhandler(Exception)
    def unhandled_error(exc: Exception):
        logger.exception("Unhandled error")
        return jsonify({"error": "Internal server error"}), 500


def _prepare_database(db: DatabaseConnection, settings) -> None:
    if getattr(settings, "AUTO_INIT_DB", False):
        apply_schema(db)
        logger.info("Schema ready (tables=%d)", len(list_tables(db)))
    if getattr(settings, "AUTO_SEED_DB", False):
        apply_seed_sql(db)


def create_app(container: Optional[Container] = None) -> Flask:
    """Build the Flask app.

    With no container the settings module picked by APP_ENV decides the
    database and storage; tests pass a container wired to in-memory
    repositories.
    """

    load_dotenv(override=False)
    settings = load_settings()

    app = Flask(__name__)
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["DB_CONFIG"] = dict(settings.DB_CONFIG)
    _configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    if container is None:
        db = DatabaseConnection(DBConfig.from_settings(settings.DB_CONFIG))
        logger.info("settings=%s db=%s", get_settings_module(), db.config.describe())
        _prepare_database(db, settings)
        container = build_container(
            db=db,
            object_storage_dir=settings.OBJECT_STORAGE_DIR,
            public_base_url=getattr(settings, "PUBLIC_BASE_URL", ""),
        )

    app.extensions["class_attendance"] = container

    register_students(app, container)
    register_sessions(app, container)
    register_attendance(app, container)
    register_dashboard(app, container)
    register_storage(app, container)
    register_commands(app)
    _register_error_handlers(app)

    return app
