from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from clarivex.domain.exceptions import InvalidIdentityError


@dataclass(frozen=True)
class Identity:
    external_id: str
    username: str
    discriminator: str = "0"
    avatar: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.external_id, str) or not self.external_id.strip():
            raise InvalidIdentityError("Identity external_id is required.")
        if not isinstance(self.username, str) or not self.username.strip():
            raise InvalidIdentityError("Identity username is required.")


@dataclass(frozen=True)
class UserSession:
    session_id: str
    identity: Identity
    created_at: datetime
    expires_at: datetime

    def is_expired(self, *, now: datetime) -> bool:
        return self.expires_at <= now
