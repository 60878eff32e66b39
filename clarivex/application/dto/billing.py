from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CreateCheckoutSessionOutput:
    session_id: str
    url: str | None


@dataclass(frozen=True)
class StripeWebhookInput:
    signature: str | None
    payload: bytes


@dataclass(frozen=True)
class StripeWebhookOutput:
    event_type: str
    handled: bool
    duplicate: bool = False


@dataclass(frozen=True)
class StripeCheckoutSessionResult:
    id: str
    url: str | None


@dataclass(frozen=True)
class StripeCheckoutCompletedEventData:
    external_id: str | None
    customer_id: str | None


@dataclass(frozen=True)
class StripeWebhookEvent:
    event_id: str
    event_type: str
    checkout_completed: StripeCheckoutCompletedEventData | None
