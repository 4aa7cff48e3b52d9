from __future__ import annotations

import datetime as dt
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..common.datetime_utils import parse_iso_date
from ..common.validators import ValidationResult, require_non_blank, validate_payload
from ..core.constants import NAME_MAX_LENGTH

REQUIRED_MESSAGES = {
    "name": "Session name is required",
    "date": "Date is required",
}


class SessionCreate(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str = Field(max_length=NAME_MAX_LENGTH)
    date: dt.date

    @field_validator("name")
    @classmethod
    def _name(cls, value: str) -> str:
        return require_non_blank(value, REQUIRED_MESSAGES["name"])

    @field_validator("date", mode="before")
    @classmethod
    def _date(cls, value: Any) -> dt.date:
        if isinstance(value, dt.date):
            return value
        if not isinstance(value, str) or not value.strip():
            raise ValueError(REQUIRED_MESSAGES["date"])
        try:
            return parse_iso_date(value.strip())
        except ValueError:
            raise ValueError("Date must be in YYYY-MM-DD format")


def validate_create_session(payload: Any) -> ValidationResult[SessionCreate]:
    return validate_payload(SessionCreate, payload, required_messages=REQUIRED_MESSAGES)
