from __future__ import annotations

import logging
from datetime import datetime
from threading import Lock

from clarivex.application.ports.session_store_port import SessionStorePort
from clarivex.domain.entities.identity import UserSession


logger = logging.getLogger(__name__)


class InMemorySessionStore(SessionStorePort):
    """Process-wide session map keyed by hashed session token.

    Sessions never change after insert; they are removed on logout or evicted
    lazily when read past ``expires_at``. ``purge_expired`` sweeps the rest.
    """

    def __init__(self):
        self._sessions: dict[str, UserSession] = {}
        self._lock = Lock()

    def put(self, *, session: UserSession) -> None:
        with self._lock:
            self._sessions[session.session_id] = session

    def get(self, *, session_id: str, now: datetime) -> UserSession | None:
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                return None
            if session.is_expired(now=now):
                del self._sessions[session_id]
                logger.info(
                    "session_store: evicted_expired discord_id=%s",
                    session.identity.external_id,
                )
                return None
            return session

    def delete(self, *, session_id: str) -> None:
        with self._lock:
            self._sessions.pop(session_id, None)

    def purge_expired(self, *, now: datetime) -> int:
        with self._lock:
            expired = [key for key, session in self._sessions.items() if session.is_expired(now=now)]
            for key in expired:
                del self._sessions[key]
        if expired:
            logger.info("session_store: purged_expired count=%s", len(expired))
        return len(expired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
