from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from clarivex.domain.entities.identity import Identity


@dataclass(frozen=True)
class BeginLoginOutput:
    authorize_url: str
    state: str
    state_token: str


@dataclass(frozen=True)
class CompleteLoginInput:
    code: str | None
    state: str | None
    state_token: str | None
    error: str | None = None


@dataclass(frozen=True)
class CompleteLoginOutput:
    identity: Identity
    session_token: str
    expires_at: datetime


@dataclass(frozen=True)
class LogoutInput:
    session_token: str


@dataclass(frozen=True)
class OauthStatePayload:
    state: str


@dataclass(frozen=True)
class DiscordIdentityInfo:
    id: str
    username: str
    discriminator: str | None
    avatar: str | None
