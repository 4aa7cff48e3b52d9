import os

from .base import *  # noqa: F401,F403

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
PUBLIC_BASE_URL = os.getenv("PUBLIC_BASE_URL", "http://localhost:5000")
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
