import os

from .base import *  # noqa: F401,F403

OBJECT_STORAGE_DIR = os.getenv("OBJECT_STORAGE_DIR", "/var/lib/class-attendance/objects")
