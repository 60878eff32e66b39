from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from clarivex.domain.exceptions import DownstreamNotificationError
from clarivex.infrastructure.clients.bot_webhook_client import (
    BotWebhookClient,
    BotWebhookClientSettings,
)
from clarivex.shared.config import get_settings


def _make_client(handler, *, max_attempts: int = 3, url: str = "https://bot.test/premium") -> BotWebhookClient:
    return BotWebhookClient(
        BotWebhookClientSettings(
            url=url,
            timeout_seconds=1,
            max_attempts=max_attempts,
            initial_backoff_seconds=0,
        ),
        transport=httpx.MockTransport(handler),
    )


def test_notify_premium_posts_discord_id_and_premium_flag():
    bodies: list[dict] = []

    def handler(request: httpx.Request) -> httpx.Response:
        bodies.append(json.loads(request.content))
        return httpx.Response(200)

    asyncio.run(_make_client(handler).notify_premium(external_id="123"))

    assert bodies == [{"discordId": "123", "premium": True}]


def test_notify_premium_retries_until_success():
    statuses = iter([503, 502, 200])
    calls: list[int] = []

    def handler(request: httpx.Request) -> httpx.Response:
        status = next(statuses)
        calls.append(status)
        return httpx.Response(status)

    asyncio.run(_make_client(handler, max_attempts=3).notify_premium(external_id="123"))

    assert calls == [503, 502, 200]


def test_notify_premium_raises_after_max_attempts():
    calls: list[int] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(1)
        raise httpx.ConnectTimeout("timeout", request=request)

    with pytest.raises(DownstreamNotificationError):
        asyncio.run(_make_client(handler, max_attempts=2).notify_premium(external_id="123"))

    assert len(calls) == 2


def test_notify_premium_without_url_fails_without_request():
    calls: list[int] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(1)
        return httpx.Response(200)

    with pytest.raises(DownstreamNotificationError):
        asyncio.run(_make_client(handler, url="").notify_premium(external_id="123"))

    assert calls == []


def test_settings_read_total_attempt_count(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("BOT_WEBHOOK_MAX_ATTEMPTS", "5")

    assert get_settings().bot_webhook_max_attempts == 5
