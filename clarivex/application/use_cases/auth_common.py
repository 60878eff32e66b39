from __future__ import annotations

from datetime import datetime, timezone

from clarivex.application.dto.auth import DiscordIdentityInfo
from clarivex.domain.entities.identity import Identity


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def build_identity(info: DiscordIdentityInfo) -> Identity:
    return Identity(
        external_id=info.id,
        username=info.username,
        discriminator=info.discriminator or "0",
        avatar=info.avatar,
    )
