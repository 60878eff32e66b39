from __future__ import annotations

from clarivex.application.dto.auth import BeginLoginOutput
from clarivex.application.ports.discord_oauth_port import DiscordOauthPort
from clarivex.application.ports.token_port import TokenPort

from .auth_common import utcnow


class BeginLoginUseCase:
    def __init__(self, *, discord_oauth_port: DiscordOauthPort, token_port: TokenPort):
        self._discord_oauth_port = discord_oauth_port
        self._token_port = token_port

    def execute(self) -> BeginLoginOutput:
        state = self._token_port.generate_state()
        return BeginLoginOutput(
            authorize_url=self._discord_oauth_port.build_authorize_url(state=state),
            state=state,
            state_token=self._token_port.create_state_token(state=state, now=utcnow()),
        )
