"""Input schemas for attendance writes and history filters."""

from __future__ import annotations

import datetime as dt
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..common.datetime_utils import parse_iso_date
from ..common.validators import FieldViolation, Invalid, Valid, ValidationResult, validate_payload
from ..core.enums import AttendanceStatus
from .model import AttendanceFilter, NewAttendanceRecord

REQUIRED_MESSAGES = {
    "studentId": "Student is required",
    "sessionId": "Session is required",
    "status": "Status is required",
    "records": "Records are required",
}


class AttendanceCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    student_id: int = Field(alias="studentId", strict=True, gt=0)
    session_id: int = Field(alias="sessionId", strict=True, gt=0)
    status: AttendanceStatus
    notes: Optional[str] = None

    def to_new_record(self) -> NewAttendanceRecord:
        return NewAttendanceRecord(
            student_id=self.student_id,
            session_id=self.session_id,
            status=self.status,
            notes=self.notes,
        )


class BulkAttendanceCreate(BaseModel):
    model_config = ConfigDict(extra="ignore")

    records: List[AttendanceCreate]


class AttendanceFilterQuery(BaseModel):
    """History filters as they arrive in the query string (all strings)."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    status: Optional[AttendanceStatus] = None
    session_id: Optional[int] = Field(default=None, alias="sessionId", gt=0)
    start_date: Optional[dt.date] = Field(default=None, alias="from")
    end_date: Optional[dt.date] = Field(default=None, alias="to")
    search: Optional[str] = Field(default=None, alias="q")

    @field_validator("status", "session_id", "start_date", "end_date", "search", mode="before")
    @classmethod
    def _blank_is_unset(cls, value: Any) -> Any:
        if isinstance(value, str) and (not value.strip() or value == "all"):
            return None
        return value

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def _iso_date(cls, value: Any) -> Any:
        if isinstance(value, str):
            if not value.strip():
                return None
            try:
                return parse_iso_date(value.strip())
            except ValueError:
                raise ValueError("Date must be in YYYY-MM-DD format")
        return value

    @model_validator(mode="after")
    def _range(self) -> "AttendanceFilterQuery":
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("'to' must not be before 'from'")
        return self

    def to_filter(self) -> AttendanceFilter:
        return AttendanceFilter(
            status=self.status,
            session_id=self.session_id,
            start_date=self.start_date,
            end_date=self.end_date,
            search=self.search.strip() if self.search else None,
        )


def validate_create_attendance(payload: Any) -> ValidationResult[NewAttendanceRecord]:
    result = validate_payload(AttendanceCreate, payload, required_messages=REQUIRED_MESSAGES)
    if isinstance(result, Invalid):
        return result
    return Valid(result.value.to_new_record())


def validate_bulk_attendance(payload: Any) -> ValidationResult[List[NewAttendanceRecord]]:
    """Validate a ``{records: [...]}`` batch.

    Every record must target the same session as the first one; the batch
    replaces that session's attendance as a whole.
    """

    result = validate_payload(BulkAttendanceCreate, payload, required_messages=REQUIRED_MESSAGES)
    if isinstance(result, Invalid):
        return result

    records = [r.to_new_record() for r in result.value.records]
    if records:
        target = records[0].session_id
        mismatched = tuple(
            FieldViolation(
                path=("records", i, "sessionId"),
                message=f"All records must belong to session {target}",
            )
            for i, r in enumerate(records)
            if r.session_id != target
        )
        if mismatched:
            return Invalid(mismatched)
    return Valid(records)


def validate_attendance_filters(args: Any) -> ValidationResult[AttendanceFilter]:
    result = validate_payload(AttendanceFilterQuery, args)
    if isinstance(result, Invalid):
        return result
    return Valid(result.value.to_filter())
