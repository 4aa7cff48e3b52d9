"""Defaults shared across feature modules."""

RECENT_SESSIONS_LIMIT = 5
STUDENT_ID_MAX_LENGTH = 50
NAME_MAX_LENGTH = 255
CSV_EXPORT_PREFIX = "attendance-export"
