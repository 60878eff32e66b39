from __future__ import annotations

from dataclasses import dataclass

from clarivex.application.dto.billing import CreateCheckoutSessionOutput
from clarivex.application.ports.stripe_port import StripePort
from clarivex.domain.entities.identity import Identity


@dataclass(frozen=True)
class PremiumProduct:
    amount: int
    currency: str
    name: str


class CreateCheckoutSessionUseCase:
    def __init__(
        self,
        *,
        stripe_port: StripePort,
        product: PremiumProduct,
        site_url: str,
    ):
        self._stripe_port = stripe_port
        self._product = product
        self._site_url = site_url.rstrip("/")

    async def execute(self, *, identity: Identity) -> CreateCheckoutSessionOutput:
        result = await self._stripe_port.create_checkout_session(
            external_id=identity.external_id,
            amount=self._product.amount,
            currency=self._product.currency,
            product_name=self._product.name,
            success_url=f"{self._site_url}/success.html?session_id={{CHECKOUT_SESSION_ID}}",
            cancel_url=f"{self._site_url}/pricing.html",
        )
        return CreateCheckoutSessionOutput(session_id=result.id, url=result.url)
