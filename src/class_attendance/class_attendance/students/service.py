from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from ..common.validators import unwrap
from ..core.exceptions import NotFoundError
from .model import Student, StudentStats
from .repository import StudentRepository
from .schemas import validate_create_student, validate_update_student

logger = logging.getLogger(__name__)


class StudentService:
    """Use cases over the student roster."""

    def __init__(self, students: StudentRepository):
        self._students = students

    def list_students(self, *, search: Optional[str] = None) -> Sequence[Student]:
        search = (search or "").strip() or None
        return self._students.list_all(search=search)

    def list_student_stats(self) -> Sequence[StudentStats]:
        return self._students.list_stats()

    def get_student(self, student_id: int) -> Student:
        student = self._students.get_by_id(int(student_id))
        if not student:
            raise NotFoundError("Student not found")
        return student

    def create_student(self, payload: Any) -> Student:
        data = unwrap(validate_create_student(payload))
        student = self._students.create(
            student_id=data.student_id,
            first_name=data.first_name,
            last_name=data.last_name,
            email=data.email,
            photo_url=data.photo_url,
        )
        logger.info("Created student id=%s student_id=%s", student.id, student.student_id)
        return student

    def update_student(self, student_id: int, payload: Any) -> Student:
        changes = unwrap(validate_update_student(payload)).changes()
        student = self._students.update(int(student_id), changes)
        if not student:
            raise NotFoundError("Student not found")
        if changes:
            logger.info("Updated student id=%s fields=%s", student.id, sorted(changes))
        return student

    def delete_student(self, student_id: int) -> None:
        if not self._students.delete(int(student_id)):
            raise NotFoundError("Student not found")
        logger.info("Deleted student id=%s", student_id)
