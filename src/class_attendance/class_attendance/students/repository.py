from __future__ import annotations

from typing import Mapping, Optional, Protocol, Sequence

from .model import Student, StudentStats


class StudentRepository(Protocol):
    def list_all(self, *, search: Optional[str] = None) -> Sequence[Student]:
        """Students ordered by (last_name, first_name) in code point order, ties by id."""

        raise NotImplementedError

    def get_by_id(self, student_id: int) -> Optional[Student]:
        raise NotImplementedError

    def create(
        self,
        *,
        student_id: str,
        first_name: str,
        last_name: str,
        email: str,
        photo_url: Optional[str] = None,
    ) -> Student:
        """Raises ConflictError when student_id is already taken."""

        raise NotImplementedError

    def update(self, student_id: int, changes: Mapping[str, object]) -> Optional[Student]:
        """Apply only the given columns. Returns None when the row does not exist."""

        raise NotImplementedError

    def delete(self, student_id: int) -> bool:
        """Delete the student and, by cascade, its attendance records."""

        raise NotImplementedError

    def list_stats(self) -> Sequence[StudentStats]:
        raise NotImplementedError
