from __future__ import annotations

from typing import Protocol

from clarivex.application.dto.billing import StripeCheckoutSessionResult, StripeWebhookEvent


class StripePort(Protocol):
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
        ...

    def verify_webhook(self, *, signature: str, payload: bytes) -> StripeWebhookEvent:
        ...
