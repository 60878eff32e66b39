from __future__ import annotations

from clarivex.application.dto.auth import LogoutInput
from clarivex.application.ports.session_store_port import SessionStorePort
from clarivex.application.ports.token_port import TokenPort


class LogoutSessionUseCase:
    def __init__(self, *, session_store: SessionStorePort, token_port: TokenPort):
        self._session_store = session_store
        self._token_port = token_port

    def execute(self, command: LogoutInput) -> None:
        token = command.session_token.strip()
        if not token:
            return
        self._session_store.delete(
            session_id=self._token_port.hash_session_token(session_token=token),
        )
