from __future__ import annotations

import hashlib
import hmac
import secrets
from datetime import datetime, timedelta

import jwt

from clarivex.application.dto.auth import OauthStatePayload
from clarivex.application.ports.token_port import TokenPort


STATE_TOKEN_TYPE = "oauth_state"


class SessionTokenService(TokenPort):
    def __init__(
        self,
        *,
        session_secret: str,
        session_ttl_hours: int,
        state_ttl_minutes: int = 10,
    ):
        self._session_secret = session_secret
        self._session_ttl_hours = session_ttl_hours
        self._state_ttl_minutes = state_ttl_minutes

    def generate_session_token(self) -> str:
        return secrets.token_urlsafe(48)

    def hash_session_token(self, *, session_token: str) -> str:
        return hmac.new(
            self._session_secret.encode("utf-8"),
            session_token.encode("utf-8"),
            hashlib.sha256,
        ).hexdigest()

    def session_expires_at(self, *, now: datetime) -> datetime:
        return now + timedelta(hours=self._session_ttl_hours)

    def generate_state(self) -> str:
        return secrets.token_urlsafe(24)

    def create_state_token(self, *, state: str, now: datetime) -> str:
        exp = now + timedelta(minutes=self._state_ttl_minutes)
        payload = {
            "state": state,
            "type": STATE_TOKEN_TYPE,
            "iat": int(now.timestamp()),
            "exp": int(exp.timestamp()),
        }
        return jwt.encode(payload, self._session_secret, algorithm="HS256")

    def decode_state_token(self, *, token: str) -> OauthStatePayload:
        try:
            payload = jwt.decode(token, self._session_secret, algorithms=["HS256"])
        except jwt.PyJWTError as exc:
            raise ValueError("Invalid OAuth state token.") from exc

        if payload.get("type") != STATE_TOKEN_TYPE:
            raise ValueError("Invalid token type.")

        state = payload.get("state")
        if not state or not isinstance(state, str):
            raise ValueError("Invalid OAuth state.")

        return OauthStatePayload(state=state)
