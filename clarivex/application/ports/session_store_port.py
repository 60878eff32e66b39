from __future__ import annotations

from datetime import datetime
from typing import Protocol

from clarivex.domain.entities.identity import UserSession


class SessionStorePort(Protocol):
    def put(self, *, session: UserSession) -> None:
        ...

    def get(self, *, session_id: str, now: datetime) -> UserSession | None:
        ...

    def delete(self, *, session_id: str) -> None:
        ...
