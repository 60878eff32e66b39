from __future__ import annotations

from typing import Protocol


class BotNotifierPort(Protocol):
    async def notify_premium(self, *, external_id: str) -> None:
        ...
