from __future__ import annotations

import asyncio
from dataclasses import dataclass
import logging

import httpx

from clarivex.application.ports.bot_notifier_port import BotNotifierPort
from clarivex.domain.exceptions import DownstreamNotificationError


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BotWebhookClientSettings:
    url: str
    timeout_seconds: float
    max_attempts: int
    initial_backoff_seconds: float = 0.5


class BotWebhookClient(BotNotifierPort):
    def __init__(
        self,
        settings: BotWebhookClientSettings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._settings = settings
        self._transport = transport

    async def notify_premium(self, *, external_id: str) -> None:
        if not self._settings.url:
            raise DownstreamNotificationError("BOT_WEBHOOK_URL is not configured.")
        await self._post_json({"discordId": external_id, "premium": True})

    async def _post_json(self, payload: dict) -> None:
        attempts = max(1, self._settings.max_attempts)
        delay = self._settings.initial_backoff_seconds
        last_exc: Exception | None = None

        for attempt in range(1, attempts + 1):
            try:
                async with httpx.AsyncClient(
                    timeout=self._settings.timeout_seconds,
                    transport=self._transport,
                ) as client:
                    response = await client.post(self._settings.url, json=payload)
                    response.raise_for_status()
                return
            except httpx.HTTPError as exc:
                last_exc = exc
                if attempt == attempts:
                    break
                logger.warning(
                    "bot_webhook_client: notify_retry attempt=%s/%s error=%s",
                    attempt,
                    attempts,
                    exc,
                )
                await asyncio.sleep(delay)
                delay *= 2

        raise DownstreamNotificationError(
            f"Bot notification failed after {attempts} attempts: {last_exc}"
        ) from last_exc
