from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv


load_dotenv()

DEFAULT_PUBLIC_DIR = Path(__file__).resolve().parent.parent / "public"
DEFAULT_PAGES_DIR = Path(__file__).resolve().parent.parent / "pages"


def _env(name: str, default: str | None = None) -> str | None:
    return os.getenv(name, default)


def _bool(name: str, default: bool) -> bool:
    value = _env(name)
    if value is None or value == "":
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    site_url: str
    discord_client_id: str
    discord_client_secret: str
    discord_callback_url: str
    discord_api_base: str
    discord_timeout_seconds: float
    session_secret: str
    session_ttl_hours: int
    session_cookie_secure: bool
    stripe_secret_key: str
    stripe_webhook_secret: str
    premium_price_amount: int
    premium_price_currency: str
    premium_product_name: str
    bot_webhook_url: str
    bot_webhook_timeout_seconds: float
    bot_webhook_max_attempts: int
    database_url: str
    public_dir: str
    pages_dir: str
    post_login_redirect: str
    login_failure_redirect: str
    host: str
    port: int
    log_level: str


def get_settings() -> Settings:
    site_url = _env("SITE_URL", "http://localhost:4242").rstrip("/")
    return Settings(
        site_url=site_url,
        discord_client_id=_env("DISCORD_CLIENT_ID", ""),
        discord_client_secret=_env("DISCORD_CLIENT_SECRET", ""),
        discord_callback_url=_env("DISCORD_CALLBACK_URL", f"{site_url}/auth/discord/callback"),
        discord_api_base=_env("DISCORD_API_BASE", "https://discord.com/api"),
        discord_timeout_seconds=float(_env("DISCORD_TIMEOUT_SECONDS", "10")),
        session_secret=_env("SESSION_SECRET", ""),
        session_ttl_hours=int(_env("SESSION_TTL_HOURS", "168")),
        session_cookie_secure=_bool("SESSION_COOKIE_SECURE", site_url.startswith("https://")),
        stripe_secret_key=_env("STRIPE_SECRET_KEY", ""),
        stripe_webhook_secret=_env("STRIPE_ENDPOINT_SECRET", ""),
        premium_price_amount=int(_env("PREMIUM_PRICE_AMOUNT", "399")),
        premium_price_currency=_env("PREMIUM_PRICE_CURRENCY", "eur"),
        premium_product_name=_env("PREMIUM_PRODUCT_NAME", "Clarivex Premium (lifetime access)"),
        bot_webhook_url=_env("BOT_WEBHOOK_URL", ""),
        bot_webhook_timeout_seconds=float(_env("BOT_WEBHOOK_TIMEOUT_SECONDS", "5")),
        bot_webhook_max_attempts=int(_env("BOT_WEBHOOK_MAX_ATTEMPTS", "3")),
        database_url=_env("DATABASE_URL", "sqlite:///./clarivex.db"),
        public_dir=_env("PUBLIC_DIR", str(DEFAULT_PUBLIC_DIR)),
        pages_dir=_env("PAGES_DIR", str(DEFAULT_PAGES_DIR)),
        post_login_redirect=_env("POST_LOGIN_REDIRECT", "/"),
        login_failure_redirect=_env("LOGIN_FAILURE_REDIRECT", "/auth/failure"),
        host=_env("HOST", "0.0.0.0"),
        port=int(_env("PORT", "4242")),
        log_level=_env("LOG_LEVEL", "INFO").upper(),
    )
