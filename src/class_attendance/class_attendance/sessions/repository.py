from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import Session


class SessionRepository(Protocol):
    def list_all(self) -> Sequence[Session]:
        """Sessions by date descending, ties in insertion order."""

        raise NotImplementedError

    def list_recent(self, limit: int) -> Sequence[Session]:
        raise NotImplementedError

    def get_by_id(self, session_id: int) -> Optional[Session]:
        raise NotImplementedError

    def create(self, *, name: str, session_date: date) -> Session:
        raise NotImplementedError

    def delete(self, session_id: int) -> bool:
        """Not exposed over HTTP; attendance records go with it by cascade."""

        raise NotImplementedError
