"""Settings shared by every environment; each APP_ENV module overrides what differs."""

import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "class_attendance"),
}

DEBUG = False
TESTING = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Photos land here; upload URLs handed to clients are built from PUBLIC_BASE_URL.
OBJECT_STORAGE_DIR = os.getenv("OBJECT_STORAGE_DIR", "var/objects")
PUBLIC_BASE_URL = os.getenv("PUBLIC_BASE_URL", "")

# AUTO_INIT_DB applies schema.sql on startup (CREATE ... IF NOT EXISTS, safe to repeat).
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
