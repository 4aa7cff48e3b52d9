from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import AttendanceFilter, AttendanceRecord, AttendanceRecordDetail, NewAttendanceRecord


class AttendanceRepository(Protocol):
    def list_details(self, filters: Optional[AttendanceFilter] = None) -> Sequence[AttendanceRecordDetail]:
        """Records joined with student and session (inner join: orphans are skipped).

        Ordered by session date descending, then student last name.
        """

        raise NotImplementedError

    def list_by_session(self, session_id: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def create(self, record: NewAttendanceRecord) -> AttendanceRecord:
        raise NotImplementedError

    def replace_for_session(self, records: Sequence[NewAttendanceRecord]) -> Sequence[AttendanceRecord]:
        """Delete every record of records[0].session_id, then insert the batch.

        An empty batch performs no writes and returns []. Implementations run
        the delete and the inserts in a single transaction.
        """

        raise NotImplementedError
