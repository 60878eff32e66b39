from __future__ import annotations

from pydantic import BaseModel


class CreateCheckoutSessionResponse(BaseModel):
    sessionId: str
    url: str | None = None


class CheckoutErrorResponse(BaseModel):
    error: str


class StripeWebhookResponse(BaseModel):
    event_type: str
    handled: bool
    duplicate: bool = False
