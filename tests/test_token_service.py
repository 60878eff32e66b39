from __future__ import annotations

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from clarivex.infrastructure.security.token_service import SessionTokenService


def _service(secret: str = "test-secret") -> SessionTokenService:
    return SessionTokenService(session_secret=secret, session_ttl_hours=24)


def test_session_token_hash_is_stable_and_secret_dependent():
    token = _service().generate_session_token()

    assert _service().hash_session_token(session_token=token) == _service().hash_session_token(
        session_token=token
    )
    assert _service().hash_session_token(session_token=token) != _service(
        "other-secret"
    ).hash_session_token(session_token=token)


def test_session_expires_after_ttl():
    now = datetime(2026, 1, 1, tzinfo=timezone.utc)

    assert _service().session_expires_at(now=now) == now + timedelta(hours=24)


def test_state_token_round_trip():
    service = _service()
    state = service.generate_state()

    token = service.create_state_token(state=state, now=datetime.now(timezone.utc))

    assert service.decode_state_token(token=token).state == state


def test_state_token_rejects_other_secret():
    token = _service().create_state_token(state="abc", now=datetime.now(timezone.utc))

    with pytest.raises(ValueError):
        _service("other-secret").decode_state_token(token=token)


def test_state_token_rejects_expired_token():
    issued = datetime.now(timezone.utc) - timedelta(hours=1)
    token = _service().create_state_token(state="abc", now=issued)

    with pytest.raises(ValueError):
        _service().decode_state_token(token=token)


def test_state_token_rejects_wrong_type():
    token = jwt.encode({"state": "abc", "type": "access"}, "test-secret", algorithm="HS256")

    with pytest.raises(ValueError):
        _service().decode_state_token(token=token)
