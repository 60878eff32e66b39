from __future__ import annotations

from typing import Protocol

from clarivex.application.dto.auth import DiscordIdentityInfo


class DiscordOauthPort(Protocol):
    def build_authorize_url(self, *, state: str) -> str:
        ...

    async def exchange_code(self, *, code: str) -> DiscordIdentityInfo:
        ...
