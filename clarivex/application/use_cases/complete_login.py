from __future__ import annotations

import hmac

from clarivex.application.dto.auth import CompleteLoginInput, CompleteLoginOutput
from clarivex.application.ports.discord_oauth_port import DiscordOauthPort
from clarivex.application.ports.session_store_port import SessionStorePort
from clarivex.application.ports.token_port import TokenPort
from clarivex.domain.entities.identity import UserSession
from clarivex.domain.exceptions import AuthExchangeFailureError, InvalidIdentityError

from .auth_common import build_identity, utcnow


class CompleteLoginUseCase:
    def __init__(
        self,
        *,
        discord_oauth_port: DiscordOauthPort,
        token_port: TokenPort,
        session_store: SessionStorePort,
    ):
        self._discord_oauth_port = discord_oauth_port
        self._token_port = token_port
        self._session_store = session_store

    async def execute(self, command: CompleteLoginInput) -> CompleteLoginOutput:
        if command.error:
            raise AuthExchangeFailureError(f"Discord returned an error: {command.error}")
        if not command.code:
            raise AuthExchangeFailureError("Missing authorization code.")
        self._check_state(command)

        info = await self._discord_oauth_port.exchange_code(code=command.code)
        try:
            identity = build_identity(info)
        except InvalidIdentityError as exc:
            raise AuthExchangeFailureError(str(exc)) from exc

        now = utcnow()
        session_token = self._token_port.generate_session_token()
        session = UserSession(
            session_id=self._token_port.hash_session_token(session_token=session_token),
            identity=identity,
            created_at=now,
            expires_at=self._token_port.session_expires_at(now=now),
        )
        self._session_store.put(session=session)
        return CompleteLoginOutput(
            identity=identity,
            session_token=session_token,
            expires_at=session.expires_at,
        )

    def _check_state(self, command: CompleteLoginInput) -> None:
        if not command.state or not command.state_token:
            raise AuthExchangeFailureError("Missing OAuth state.")
        try:
            payload = self._token_port.decode_state_token(token=command.state_token)
        except ValueError as exc:
            raise AuthExchangeFailureError(str(exc)) from exc
        if not hmac.compare_digest(payload.state, command.state):
            raise AuthExchangeFailureError("OAuth state mismatch.")
