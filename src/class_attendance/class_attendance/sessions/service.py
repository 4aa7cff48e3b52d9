from __future__ import annotations

import logging
from typing import Any, Sequence

from ..common.validators import unwrap
from ..core.exceptions import NotFoundError
from .model import Session
from .repository import SessionRepository
from .schemas import validate_create_session

logger = logging.getLogger(__name__)


class SessionService:
    def __init__(self, sessions: SessionRepository):
        self._sessions = sessions

    def list_sessions(self) -> Sequence[Session]:
        return self._sessions.list_all()

    def get_session(self, session_id: int) -> Session:
        session = self._sessions.get_by_id(int(session_id))
        if not session:
            raise NotFoundError("Session not found")
        return session

    def create_session(self, payload: Any) -> Session:
        data = unwrap(validate_create_session(payload))
        session = self._sessions.create(name=data.name, session_date=data.date)
        logger.info("Created session id=%s date=%s", session.id, session.date)
        return session

    def delete_session(self, session_id: int) -> None:
        """Remove a session and its attendance records. No route calls this yet."""

        if not self._sessions.delete(int(session_id)):
            raise NotFoundError("Session not found")
        logger.info("Deleted session id=%s", session_id)
