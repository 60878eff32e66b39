from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class MeResponse(BaseModel):
    id: str
    username: str
    discriminator: str
    avatar: str | None


class EntitlementResponse(BaseModel):
    id: str
    premium: bool
    granted_at: datetime | None
