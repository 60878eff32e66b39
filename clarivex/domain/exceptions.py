from __future__ import annotations


class DomainError(Exception):
    """Base for domain errors."""


class InvalidIdentityError(DomainError):
    """Identity returned by the provider is missing required fields."""


class AuthExchangeFailureError(DomainError):
    """OAuth callback could not be turned into a session."""


class UnauthenticatedAccessError(DomainError):
    """Request has no valid session."""


class PaymentProviderError(DomainError):
    """Payment provider call failed."""


class WebhookSignatureInvalidError(DomainError):
    """Webhook payload or signature did not verify."""


class DownstreamNotificationError(DomainError):
    """Bot notification could not be delivered."""
