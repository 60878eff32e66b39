from __future__ import annotations

import asyncio

import pytest

from clarivex.application.dto.billing import StripeCheckoutSessionResult
from clarivex.application.use_cases.create_checkout_session import (
    CreateCheckoutSessionUseCase,
    PremiumProduct,
)
from clarivex.domain.entities.identity import Identity
from clarivex.domain.exceptions import PaymentProviderError


class FakeStripePort:
    def __init__(self, *, error: Exception | None = None):
        self.error = error
        self.calls: list[dict] = []

    async def create_checkout_session(self, **kwargs) -> StripeCheckoutSessionResult:
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return StripeCheckoutSessionResult(id="cs_test_1", url="https://checkout.stripe.com/c/pay/cs_test_1")


def _use_case(stripe_port: FakeStripePort) -> CreateCheckoutSessionUseCase:
    return CreateCheckoutSessionUseCase(
        stripe_port=stripe_port,
        product=PremiumProduct(amount=399, currency="eur", name="Clarivex Premium (lifetime access)"),
        site_url="https://clarivex.example/",
    )


def test_checkout_session_carries_session_identity_and_fixed_price():
    stripe_port = FakeStripePort()
    identity = Identity(external_id="123", username="alice", discriminator="0001", avatar="abc")

    output = asyncio.run(_use_case(stripe_port).execute(identity=identity))

    assert output.session_id == "cs_test_1"
    call = stripe_port.calls[0]
    assert call["external_id"] == "123"
    assert call["amount"] == 399
    assert call["currency"] == "eur"
    assert call["success_url"] == "https://clarivex.example/success.html?session_id={CHECKOUT_SESSION_ID}"
    assert call["cancel_url"] == "https://clarivex.example/pricing.html"


def test_checkout_session_propagates_provider_failure():
    stripe_port = FakeStripePort(error=PaymentProviderError("Stripe is down"))
    identity = Identity(external_id="123", username="alice")

    with pytest.raises(PaymentProviderError):
        asyncio.run(_use_case(stripe_port).execute(identity=identity))

    assert len(stripe_port.calls) == 1
