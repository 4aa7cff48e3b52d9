from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence

from ..common.datetime_utils import Clock, now_local
from ..common.validators import unwrap
from ..core.constants import CSV_EXPORT_PREFIX
from ..core.exceptions import NotFoundError
from ..sessions.repository import SessionRepository
from .model import AttendanceRecord, AttendanceRecordDetail
from .repository import AttendanceRepository
from .schemas import validate_attendance_filters, validate_bulk_attendance, validate_create_attendance

logger = logging.getLogger(__name__)

EXPORT_FIELDS = ["Date", "Session", "Student ID", "First Name", "Last Name", "Status", "Notes"]


@dataclass(frozen=True)
class ExportData:
    filename: str
    rows: list[dict]


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        sessions: SessionRepository,
        *,
        clock: Clock = now_local,
    ):
        self._attendance = attendance
        self._sessions = sessions
        self._clock = clock

    def list_records(self, filter_args: Optional[Mapping[str, Any]] = None) -> Sequence[AttendanceRecordDetail]:
        filters = unwrap(validate_attendance_filters(dict(filter_args or {})))
        return self._attendance.list_details(filters)

    def list_for_session(self, session_id: int) -> Sequence[AttendanceRecord]:
        if not self._sessions.get_by_id(int(session_id)):
            raise NotFoundError("Session not found")
        return self._attendance.list_by_session(int(session_id))

    def record(self, payload: Any) -> AttendanceRecord:
        new = unwrap(validate_create_attendance(payload))
        rec = self._attendance.create(new)
        logger.info("Recorded attendance id=%s session=%s student=%s", rec.id, rec.session_id, rec.student_id)
        return rec

    def replace_for_session(self, payload: Any) -> Sequence[AttendanceRecord]:
        """Re-take attendance: the batch becomes the session's full record set."""

        records = unwrap(validate_bulk_attendance(payload))
        saved = self._attendance.replace_for_session(records)
        if records:
            logger.info("Replaced attendance for session=%s with %d records", records[0].session_id, len(saved))
        return saved

    def build_export(self, filter_args: Optional[Mapping[str, Any]] = None) -> ExportData:
        rows = [
            {
                "Date": d.session.date.strftime("%Y-%m-%d"),
                "Session": d.session.name,
                "Student ID": d.student.student_id,
                "First Name": d.student.first_name,
                "Last Name": d.student.last_name,
                "Status": d.record.status.value,
                "Notes": d.record.notes or "",
            }
            for d in self.list_records(filter_args)
        ]
        filename = f"{CSV_EXPORT_PREFIX}-{self._clock().strftime('%Y-%m-%d')}.csv"
        return ExportData(filename=filename, rows=rows)
