from __future__ import annotations

import asyncio
import json
import logging

import stripe

from clarivex.application.dto.billing import (
    StripeCheckoutCompletedEventData,
    StripeCheckoutSessionResult,
    StripeWebhookEvent,
)
from clarivex.application.ports.stripe_port import StripePort
from clarivex.domain.exceptions import PaymentProviderError, WebhookSignatureInvalidError


logger = logging.getLogger(__name__)

METADATA_EXTERNAL_ID_KEY = "discordId"


class StripeClient(StripePort):
    def __init__(self, *, secret_key: str, webhook_secret: str):
        stripe.api_key = secret_key
        self._webhook_secret = webhook_secret

    async def create_checkout_session(
        self,
        *,
        external_id: str,
        amount: int,
        currency: str,
        product_name: str,
        success_url: str,
        cancel_url: str,
    ) -> StripeCheckoutSessionResult:
        payload: dict = {
            "payment_method_types": ["card"],
            "mode": "payment",
            "line_items": [
                {
                    "price_data": {
                        "currency": currency,
                        "product_data": {"name": product_name},
                        "unit_amount": amount,
                    },
                    "quantity": 1,
                }
            ],
            "success_url": success_url,
            "cancel_url": cancel_url,
            "client_reference_id": external_id,
            "metadata": {METADATA_EXTERNAL_ID_KEY: external_id},
        }

        try:
            session = await asyncio.to_thread(stripe.checkout.Session.create, **payload)
        except stripe.StripeError as exc:
            logger.error("stripe_client: checkout_session_failed discord_id=%s error=%s", external_id, exc)
            raise PaymentProviderError(exc.user_message or str(exc)) from exc

        session_id = getattr(session, "id", None)
        if not session_id:
            raise PaymentProviderError("Stripe checkout session response is incomplete.")

        session_url = getattr(session, "url", None)
        logger.info("stripe_client: checkout_session_created id=%s discord_id=%s", session_id, external_id)
        return StripeCheckoutSessionResult(
            id=str(session_id),
            url=str(session_url) if session_url else None,
        )

    def verify_webhook(self, *, signature: str, payload: bytes) -> StripeWebhookEvent:
        # Verification needs the exact bytes Stripe signed.
        try:
            stripe.Webhook.construct_event(payload=payload, sig_header=signature, secret=self._webhook_secret)
            event = json.loads(payload)
        except stripe.SignatureVerificationError as exc:
            raise WebhookSignatureInvalidError(str(exc) or "Invalid signature.") from exc
        except ValueError as exc:
            raise WebhookSignatureInvalidError("Invalid payload.") from exc

        if not isinstance(event, dict):
            raise WebhookSignatureInvalidError("Invalid payload.")

        event_type = str(event.get("type", ""))
        event_id = str(event.get("id", ""))
        data_object = (event.get("data") or {}).get("object") or {}

        if event_type == "checkout.session.completed":
            metadata = data_object.get("metadata") or {}
            external_id = metadata.get(METADATA_EXTERNAL_ID_KEY)
            return StripeWebhookEvent(
                event_id=event_id,
                event_type=event_type,
                checkout_completed=StripeCheckoutCompletedEventData(
                    external_id=str(external_id) if external_id else None,
                    customer_id=data_object.get("customer"),
                ),
            )

        return StripeWebhookEvent(
            event_id=event_id,
            event_type=event_type,
            checkout_completed=None,
        )
