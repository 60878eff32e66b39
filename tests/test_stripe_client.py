from __future__ import annotations

import asyncio
import hashlib
import hmac
import json
import time
from types import SimpleNamespace

import pytest
import stripe

from clarivex.domain.exceptions import PaymentProviderError, WebhookSignatureInvalidError
from clarivex.infrastructure.clients.stripe_client import StripeClient


WEBHOOK_SECRET = "whsec_test_secret"


def _stripe_signature(payload: bytes, *, secret: str = WEBHOOK_SECRET, timestamp: int | None = None) -> str:
    timestamp = timestamp or int(time.time())
    signed_payload = f"{timestamp}.".encode("utf-8") + payload
    digest = hmac.new(secret.encode("utf-8"), signed_payload, hashlib.sha256).hexdigest()
    return f"t={timestamp},v1={digest}"


def _completed_event(discord_id: str | None = "123") -> bytes:
    metadata = {"discordId": discord_id} if discord_id is not None else {}
    return json.dumps(
        {
            "id": "evt_1",
            "object": "event",
            "type": "checkout.session.completed",
            "data": {"object": {"id": "cs_test_1", "object": "checkout.session", "metadata": metadata}},
        }
    ).encode("utf-8")


def _client() -> StripeClient:
    return StripeClient(secret_key="sk_test_dummy", webhook_secret=WEBHOOK_SECRET)


def test_verify_webhook_extracts_discord_id_from_metadata():
    payload = _completed_event()

    event = _client().verify_webhook(signature=_stripe_signature(payload), payload=payload)

    assert event.event_id == "evt_1"
    assert event.event_type == "checkout.session.completed"
    assert event.checkout_completed is not None
    assert event.checkout_completed.external_id == "123"


def test_verify_webhook_rejects_single_byte_tamper():
    payload = _completed_event()
    signature = _stripe_signature(payload)
    tampered = payload.replace(b'"123"', b'"124"')

    with pytest.raises(WebhookSignatureInvalidError):
        _client().verify_webhook(signature=signature, payload=tampered)


def test_verify_webhook_rejects_signature_from_other_secret():
    payload = _completed_event()

    with pytest.raises(WebhookSignatureInvalidError):
        _client().verify_webhook(signature=_stripe_signature(payload, secret="whsec_other"), payload=payload)


def test_verify_webhook_rejects_garbage_header():
    payload = _completed_event()

    with pytest.raises(WebhookSignatureInvalidError):
        _client().verify_webhook(signature="not-a-signature", payload=payload)


def test_verify_webhook_other_event_types_have_no_checkout_data():
    payload = json.dumps(
        {"id": "evt_2", "object": "event", "type": "payment_intent.created", "data": {"object": {}}}
    ).encode("utf-8")

    event = _client().verify_webhook(signature=_stripe_signature(payload), payload=payload)

    assert event.event_type == "payment_intent.created"
    assert event.checkout_completed is None


def test_create_checkout_session_embeds_discord_id(monkeypatch: pytest.MonkeyPatch):
    captured: dict = {}

    def fake_create(**kwargs):
        captured.update(kwargs)
        return SimpleNamespace(id="cs_test_1", url="https://checkout.stripe.com/c/pay/cs_test_1")

    monkeypatch.setattr(stripe.checkout.Session, "create", fake_create)

    result = asyncio.run(
        _client().create_checkout_session(
            external_id="123",
            amount=399,
            currency="eur",
            product_name="Clarivex Premium (lifetime access)",
            success_url="http://localhost:4242/success.html?session_id={CHECKOUT_SESSION_ID}",
            cancel_url="http://localhost:4242/pricing.html",
        )
    )

    assert result.id == "cs_test_1"
    assert captured["mode"] == "payment"
    assert captured["metadata"] == {"discordId": "123"}
    assert captured["line_items"] == [
        {
            "price_data": {
                "currency": "eur",
                "product_data": {"name": "Clarivex Premium (lifetime access)"},
                "unit_amount": 399,
            },
            "quantity": 1,
        }
    ]


def test_create_checkout_session_wraps_provider_errors(monkeypatch: pytest.MonkeyPatch):
    def fake_create(**kwargs):
        raise stripe.StripeError("Your card was declined.")

    monkeypatch.setattr(stripe.checkout.Session, "create", fake_create)

    with pytest.raises(PaymentProviderError) as exc_info:
        asyncio.run(
            _client().create_checkout_session(
                external_id="123",
                amount=399,
                currency="eur",
                product_name="Premium",
                success_url="http://localhost/success.html",
                cancel_url="http://localhost/pricing.html",
            )
        )

    assert "declined" in str(exc_info.value)
