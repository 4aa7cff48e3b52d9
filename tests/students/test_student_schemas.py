from __future__ import annotations

from src.class_attendance.class_attendance.common.validators import Invalid, Valid
from src.class_attendance.class_attendance.students.schemas import validate_create_student, validate_update_student


def _messages(result) -> dict:
    assert isinstance(result, Invalid)
    return {v.path: v.message for v in result.violations}


def test_create_accepts_complete_payload():
    result = validate_create_student(
        {"studentId": "S001", "firstName": "Alice", "lastName": "Smith", "email": "alice@school.edu"}
    )

    assert isinstance(result, Valid)
    assert result.value.student_id == "S001"
    assert result.value.photo_url is None


def test_create_reports_every_missing_field():
    messages = _messages(validate_create_student({}))

    assert messages == {
        ("studentId",): "Student ID is required",
        ("firstName",): "First name is required",
        ("lastName",): "Last name is required",
        ("email",): "Invalid email address",
    }


def test_create_rejects_bad_email_only():
    messages = _messages(
        validate_create_student({"studentId": "S1", "firstName": "A", "lastName": "B", "email": "not-an-email"})
    )

    assert messages == {("email",): "Invalid email address"}


def test_create_rejects_whitespace_only_names():
    messages = _messages(
        validate_create_student({"studentId": "S1", "firstName": "   ", "lastName": "", "email": "a@x.com"})
    )

    assert messages[("firstName",)] == "First name is required"
    assert messages[("lastName",)] == "Last name is required"


def test_create_keeps_surrounding_whitespace():
    result = validate_create_student({"studentId": " S1 ", "firstName": "A", "lastName": "B", "email": "a@x.com"})

    assert isinstance(result, Valid)
    assert result.value.student_id == " S1 "


def test_create_rejects_overlong_student_id():
    messages = _messages(
        validate_create_student({"studentId": "S" * 51, "firstName": "A", "lastName": "B", "email": "a@x.com"})
    )

    assert ("studentId",) in messages


def test_create_rejects_non_object_payload():
    assert isinstance(validate_create_student(["S1"]), Invalid)
    assert isinstance(validate_create_student(None), Invalid)


def test_update_applies_only_present_keys():
    result = validate_update_student({"firstName": "Alicia"})

    assert isinstance(result, Valid)
    assert result.value.changes() == {"first_name": "Alicia"}


def test_update_empty_payload_has_no_changes():
    result = validate_update_student({})

    assert isinstance(result, Valid)
    assert result.value.changes() == {}


def test_update_rejects_null_for_required_fields():
    messages = _messages(validate_update_student({"lastName": None, "email": None}))

    assert messages == {("lastName",): "Last name is required", ("email",): "Invalid email address"}


def test_update_allows_clearing_photo():
    result = validate_update_student({"photoUrl": None})

    assert isinstance(result, Valid)
    assert result.value.changes() == {"photo_url": None}


def test_non_object_body_is_reported_without_model_details():
    for body in ([], None, "S001"):
        assert _messages(validate_create_student(body)) == {(): "Request body must be a JSON object"}
