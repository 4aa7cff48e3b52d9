"""Input schemas for student writes."""

from __future__ import annotations

from typing import Any, Optional

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from ..common.validators import ValidationResult, reject_null, require_non_blank, validate_payload
from ..core.constants import NAME_MAX_LENGTH, STUDENT_ID_MAX_LENGTH

REQUIRED_MESSAGES = {
    "studentId": "Student ID is required",
    "firstName": "First name is required",
    "lastName": "Last name is required",
    "email": "Invalid email address",
}

_FIELD_MESSAGES = {
    "student_id": REQUIRED_MESSAGES["studentId"],
    "first_name": REQUIRED_MESSAGES["firstName"],
    "last_name": REQUIRED_MESSAGES["lastName"],
    "email": REQUIRED_MESSAGES["email"],
}


def _check_email(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        raise ValueError("Invalid email address")
    return value


class StudentCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    student_id: str = Field(alias="studentId", max_length=STUDENT_ID_MAX_LENGTH)
    first_name: str = Field(alias="firstName", max_length=NAME_MAX_LENGTH)
    last_name: str = Field(alias="lastName", max_length=NAME_MAX_LENGTH)
    email: str = Field(max_length=NAME_MAX_LENGTH)
    photo_url: Optional[str] = Field(default=None, alias="photoUrl")

    @field_validator("student_id", "first_name", "last_name")
    @classmethod
    def _non_blank(cls, value: str, info: ValidationInfo) -> str:
        return require_non_blank(value, _FIELD_MESSAGES[info.field_name])

    @field_validator("email")
    @classmethod
    def _email(cls, value: str) -> str:
        return _check_email(value)


class StudentUpdate(BaseModel):
    """Every field optional; only keys present in the payload are applied."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    student_id: Optional[str] = Field(default=None, alias="studentId", max_length=STUDENT_ID_MAX_LENGTH)
    first_name: Optional[str] = Field(default=None, alias="firstName", max_length=NAME_MAX_LENGTH)
    last_name: Optional[str] = Field(default=None, alias="lastName", max_length=NAME_MAX_LENGTH)
    email: Optional[str] = Field(default=None, max_length=NAME_MAX_LENGTH)
    photo_url: Optional[str] = Field(default=None, alias="photoUrl")

    @field_validator("student_id", "first_name", "last_name", "email", mode="before")
    @classmethod
    def _not_null(cls, value: Any, info: ValidationInfo) -> Any:
        return reject_null(value, _FIELD_MESSAGES[info.field_name])

    @field_validator("student_id", "first_name", "last_name")
    @classmethod
    def _non_blank(cls, value: str, info: ValidationInfo) -> str:
        return require_non_blank(value, _FIELD_MESSAGES[info.field_name])

    @field_validator("email")
    @classmethod
    def _email(cls, value: str) -> str:
        return _check_email(value)

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


def validate_create_student(payload: Any) -> ValidationResult[StudentCreate]:
    return validate_payload(StudentCreate, payload, required_messages=REQUIRED_MESSAGES)


def validate_update_student(payload: Any) -> ValidationResult[StudentUpdate]:
    return validate_payload(StudentUpdate, payload, required_messages=REQUIRED_MESSAGES)
