from __future__ import annotations

from datetime import datetime
from typing import Protocol

from clarivex.application.dto.auth import OauthStatePayload


class TokenPort(Protocol):
    def generate_session_token(self) -> str:
        ...

    def hash_session_token(self, *, session_token: str) -> str:
        ...

    def session_expires_at(self, *, now: datetime) -> datetime:
        ...

    def generate_state(self) -> str:
        ...

    def create_state_token(self, *, state: str, now: datetime) -> str:
        ...

    def decode_state_token(self, *, token: str) -> OauthStatePayload:
        ...
