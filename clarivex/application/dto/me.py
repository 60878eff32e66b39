from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class MeOutput:
    id: str
    username: str
    discriminator: str
    avatar: str | None


@dataclass(frozen=True)
class EntitlementOutput:
    id: str
    premium: bool
    granted_at: datetime | None
