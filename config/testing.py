import os

from .base import *  # noqa: F401,F403
from .base import DB_CONFIG as _BASE_DB_CONFIG

DB_CONFIG = {**_BASE_DB_CONFIG, "database": os.getenv("DB_NAME", "class_attendance_test")}

TESTING = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")
OBJECT_STORAGE_DIR = os.getenv("OBJECT_STORAGE_DIR", "var/test-objects")
PUBLIC_BASE_URL = "http://testserver"
AUTO_INIT_DB = False
AUTO_SEED_DB = False
