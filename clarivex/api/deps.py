from __future__ import annotations

from functools import lru_cache

from fastapi import Cookie, Depends, HTTPException

from clarivex.application.use_cases.auth_common import utcnow
from clarivex.application.use_cases.begin_login import BeginLoginUseCase
from clarivex.application.use_cases.complete_login import CompleteLoginUseCase
from clarivex.application.use_cases.create_checkout_session import (
    CreateCheckoutSessionUseCase,
    PremiumProduct,
)
from clarivex.application.use_cases.get_entitlement import GetEntitlementUseCase
from clarivex.application.use_cases.get_me import GetMeUseCase
from clarivex.application.use_cases.logout_session import LogoutSessionUseCase
from clarivex.application.use_cases.process_stripe_webhook import ProcessStripeWebhookUseCase
from clarivex.domain.entities.identity import UserSession
from clarivex.domain.exceptions import UnauthenticatedAccessError
from clarivex.infrastructure.clients.bot_webhook_client import (
    BotWebhookClient,
    BotWebhookClientSettings,
)
from clarivex.infrastructure.clients.discord_oauth_client import (
    DiscordOauthClient,
    DiscordOauthClientSettings,
)
from clarivex.infrastructure.clients.stripe_client import StripeClient
from clarivex.infrastructure.db.engine import get_session_factory
from clarivex.infrastructure.db.repositories.entitlements_repository import SqlEntitlementsRepository
from clarivex.infrastructure.security.token_service import SessionTokenService
from clarivex.infrastructure.session.memory_session_store import InMemorySessionStore
from clarivex.shared.config import get_settings


SESSION_COOKIE_NAME = "sid"


@lru_cache(maxsize=1)
def get_session_store() -> InMemorySessionStore:
    return InMemorySessionStore()


@lru_cache(maxsize=1)
def get_token_service() -> SessionTokenService:
    settings = get_settings()
    if not settings.session_secret:
        raise HTTPException(status_code=500, detail="SESSION_SECRET is required.")
    return SessionTokenService(
        session_secret=settings.session_secret,
        session_ttl_hours=settings.session_ttl_hours,
    )


@lru_cache(maxsize=1)
def _get_discord_oauth_client() -> DiscordOauthClient:
    settings = get_settings()
    if not settings.discord_client_id or not settings.discord_client_secret:
        raise HTTPException(
            status_code=500,
            detail="DISCORD_CLIENT_ID and DISCORD_CLIENT_SECRET are required.",
        )
    return DiscordOauthClient(
        DiscordOauthClientSettings(
            client_id=settings.discord_client_id,
            client_secret=settings.discord_client_secret,
            redirect_uri=settings.discord_callback_url,
            api_base=settings.discord_api_base,
            timeout_seconds=settings.discord_timeout_seconds,
        )
    )


@lru_cache(maxsize=1)
def _get_stripe_client() -> StripeClient:
    settings = get_settings()
    if not settings.stripe_secret_key:
        raise HTTPException(status_code=500, detail="STRIPE_SECRET_KEY is required.")
    if not settings.stripe_webhook_secret:
        raise HTTPException(status_code=500, detail="STRIPE_ENDPOINT_SECRET is required.")
    return StripeClient(
        secret_key=settings.stripe_secret_key,
        webhook_secret=settings.stripe_webhook_secret,
    )


@lru_cache(maxsize=1)
def _get_bot_webhook_client() -> BotWebhookClient:
    settings = get_settings()
    return BotWebhookClient(
        BotWebhookClientSettings(
            url=settings.bot_webhook_url,
            timeout_seconds=settings.bot_webhook_timeout_seconds,
            max_attempts=settings.bot_webhook_max_attempts,
        )
    )


def _get_entitlements_repository() -> SqlEntitlementsRepository:
    settings = get_settings()
    return SqlEntitlementsRepository(get_session_factory(settings.database_url))


def get_begin_login_use_case(
    token_service: SessionTokenService = Depends(get_token_service),
) -> BeginLoginUseCase:
    return BeginLoginUseCase(
        discord_oauth_port=_get_discord_oauth_client(),
        token_port=token_service,
    )


def get_complete_login_use_case(
    token_service: SessionTokenService = Depends(get_token_service),
    session_store: InMemorySessionStore = Depends(get_session_store),
) -> CompleteLoginUseCase:
    return CompleteLoginUseCase(
        discord_oauth_port=_get_discord_oauth_client(),
        token_port=token_service,
        session_store=session_store,
    )


def get_logout_session_use_case(
    token_service: SessionTokenService = Depends(get_token_service),
    session_store: InMemorySessionStore = Depends(get_session_store),
) -> LogoutSessionUseCase:
    return LogoutSessionUseCase(session_store=session_store, token_port=token_service)


def get_get_me_use_case() -> GetMeUseCase:
    return GetMeUseCase()


def get_get_entitlement_use_case() -> GetEntitlementUseCase:
    return GetEntitlementUseCase(entitlements_port=_get_entitlements_repository())


def get_create_checkout_session_use_case() -> CreateCheckoutSessionUseCase:
    settings = get_settings()
    return CreateCheckoutSessionUseCase(
        stripe_port=_get_stripe_client(),
        product=PremiumProduct(
            amount=settings.premium_price_amount,
            currency=settings.premium_price_currency,
            name=settings.premium_product_name,
        ),
        site_url=settings.site_url,
    )


def get_process_stripe_webhook_use_case() -> ProcessStripeWebhookUseCase:
    return ProcessStripeWebhookUseCase(
        stripe_port=_get_stripe_client(),
        entitlements_port=_get_entitlements_repository(),
        bot_notifier_port=_get_bot_webhook_client(),
    )


def get_current_session(
    session_token: str | None = Cookie(default=None, alias=SESSION_COOKIE_NAME),
    session_store: InMemorySessionStore = Depends(get_session_store),
    token_service: SessionTokenService = Depends(get_token_service),
) -> UserSession:
    if not session_token:
        raise UnauthenticatedAccessError("Missing session cookie.")

    session = session_store.get(
        session_id=token_service.hash_session_token(session_token=session_token),
        now=utcnow(),
    )
    if session is None:
        raise UnauthenticatedAccessError("Unknown or expired session.")
    return session
