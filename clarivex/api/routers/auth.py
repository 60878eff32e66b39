from __future__ import annotations

from datetime import datetime, timezone
import logging

from fastapi import APIRouter, Cookie, Depends
from fastapi.responses import HTMLResponse, RedirectResponse

from clarivex.api.deps import (
    SESSION_COOKIE_NAME,
    get_begin_login_use_case,
    get_complete_login_use_case,
    get_logout_session_use_case,
)
from clarivex.application.dto.auth import CompleteLoginInput, LogoutInput
from clarivex.application.use_cases.begin_login import BeginLoginUseCase
from clarivex.application.use_cases.complete_login import CompleteLoginUseCase
from clarivex.application.use_cases.logout_session import LogoutSessionUseCase
from clarivex.domain.exceptions import AuthExchangeFailureError
from clarivex.shared.config import get_settings


logger = logging.getLogger(__name__)

router = APIRouter()

LOGIN_PATH = "/auth/discord"
STATE_COOKIE_NAME = "oauth_state"
STATE_COOKIE_PATH = "/auth"
STATE_COOKIE_MAX_AGE_SECONDS = 10 * 60

LOGIN_FAILED_PAGE = """<!doctype html>
<html>
  <head><meta charset="utf-8"><title>Login failed</title></head>
  <body>
    <p>Discord login failed. Please try again.</p>
    <p><a href="/auth/discord">Log in with Discord</a></p>
  </body>
</html>
"""


def _cookie_max_age_seconds(expires_at: datetime) -> int:
    now = datetime.now(timezone.utc)
    return max(int((expires_at - now).total_seconds()), 0)


@router.get(LOGIN_PATH)
def begin_discord_login(
    use_case: BeginLoginUseCase = Depends(get_begin_login_use_case),
):
    settings = get_settings()
    output = use_case.execute()
    response = RedirectResponse(output.authorize_url, status_code=302)
    response.set_cookie(
        key=STATE_COOKIE_NAME,
        value=output.state_token,
        httponly=True,
        samesite="lax",
        secure=settings.session_cookie_secure,
        max_age=STATE_COOKIE_MAX_AGE_SECONDS,
        path=STATE_COOKIE_PATH,
    )
    return response


@router.get(f"{LOGIN_PATH}/callback")
async def discord_callback(
    code: str | None = None,
    state: str | None = None,
    error: str | None = None,
    state_token: str | None = Cookie(default=None, alias=STATE_COOKIE_NAME),
    use_case: CompleteLoginUseCase = Depends(get_complete_login_use_case),
):
    settings = get_settings()
    try:
        output = await use_case.execute(
            CompleteLoginInput(
                code=code,
                state=state,
                state_token=state_token,
                error=error,
            )
        )
    except AuthExchangeFailureError as exc:
        logger.warning("auth: login_failed reason=%s", exc)
        response = RedirectResponse(settings.login_failure_redirect, status_code=302)
        response.delete_cookie(key=STATE_COOKIE_NAME, path=STATE_COOKIE_PATH)
        return response

    logger.info("auth: login_succeeded discord_id=%s", output.identity.external_id)
    response = RedirectResponse(settings.post_login_redirect, status_code=302)
    response.delete_cookie(key=STATE_COOKIE_NAME, path=STATE_COOKIE_PATH)
    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=output.session_token,
        httponly=True,
        samesite="lax",
        secure=settings.session_cookie_secure,
        max_age=_cookie_max_age_seconds(output.expires_at),
        path="/",
    )
    return response


@router.get("/auth/failure", response_class=HTMLResponse)
def login_failure():
    return HTMLResponse(LOGIN_FAILED_PAGE)


@router.post("/auth/logout")
def logout(
    session_token: str | None = Cookie(default=None, alias=SESSION_COOKIE_NAME),
    use_case: LogoutSessionUseCase = Depends(get_logout_session_use_case),
):
    if session_token:
        use_case.execute(LogoutInput(session_token=session_token))
    response = RedirectResponse(LOGIN_PATH, status_code=303)
    response.delete_cookie(key=SESSION_COOKIE_NAME, path="/")
    return response
