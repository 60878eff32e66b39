from __future__ import annotations

from dataclasses import dataclass
import logging
from urllib.parse import urlencode

import httpx

from clarivex.application.dto.auth import DiscordIdentityInfo
from clarivex.application.ports.discord_oauth_port import DiscordOauthPort
from clarivex.domain.exceptions import AuthExchangeFailureError


logger = logging.getLogger(__name__)

DISCORD_SCOPES = ("identify",)


@dataclass(frozen=True)
class DiscordOauthClientSettings:
    client_id: str
    client_secret: str
    redirect_uri: str
    api_base: str
    timeout_seconds: float


class DiscordOauthClient(DiscordOauthPort):
    def __init__(
        self,
        settings: DiscordOauthClientSettings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._settings = settings
        self._transport = transport

    def build_authorize_url(self, *, state: str) -> str:
        params = {
            "client_id": self._settings.client_id,
            "redirect_uri": self._settings.redirect_uri,
            "response_type": "code",
            "scope": " ".join(DISCORD_SCOPES),
            "state": state,
            "prompt": "none",
        }
        return f"{self._api_url('/oauth2/authorize')}?{urlencode(params)}"

    async def exchange_code(self, *, code: str) -> DiscordIdentityInfo:
        try:
            async with httpx.AsyncClient(
                timeout=self._settings.timeout_seconds,
                transport=self._transport,
            ) as client:
                token_res = await client.post(
                    self._api_url("/oauth2/token"),
                    headers={"Content-Type": "application/x-www-form-urlencoded"},
                    data={
                        "client_id": self._settings.client_id,
                        "client_secret": self._settings.client_secret,
                        "grant_type": "authorization_code",
                        "code": code,
                        "redirect_uri": self._settings.redirect_uri,
                    },
                )
                if token_res.status_code != 200:
                    logger.warning(
                        "discord_oauth_client: token_exchange_failed status=%s",
                        token_res.status_code,
                    )
                    raise AuthExchangeFailureError("Failed to exchange code for token.")

                token = token_res.json()
                access_token = token.get("access_token")
                token_type = token.get("token_type") or "Bearer"
                if not access_token:
                    raise AuthExchangeFailureError("Discord token response missing access_token.")

                me_res = await client.get(
                    self._api_url("/users/@me"),
                    headers={"Authorization": f"{token_type} {access_token}"},
                )
                if me_res.status_code != 200:
                    logger.warning(
                        "discord_oauth_client: fetch_user_failed status=%s",
                        me_res.status_code,
                    )
                    raise AuthExchangeFailureError("Failed to fetch Discord user.")
                me = me_res.json()
        except httpx.HTTPError as exc:
            raise AuthExchangeFailureError(f"Discord request failed: {exc}") from exc
        except ValueError as exc:
            raise AuthExchangeFailureError("Discord returned invalid JSON.") from exc

        # Provider tokens go out of scope here; only the profile is kept.
        user_id = me.get("id")
        username = me.get("username")
        if not user_id or not username:
            raise AuthExchangeFailureError("Discord user payload missing id/username.")

        return DiscordIdentityInfo(
            id=str(user_id),
            username=str(username),
            discriminator=_as_optional_str(me.get("discriminator")),
            avatar=_as_optional_str(me.get("avatar")),
        )

    def _api_url(self, path: str) -> str:
        return f"{self._settings.api_base.rstrip('/')}{path}"


def _as_optional_str(value) -> str | None:
    if value is None:
        return None
    return str(value)
