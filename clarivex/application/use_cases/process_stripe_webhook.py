from __future__ import annotations

import asyncio
import logging

from clarivex.application.dto.billing import StripeWebhookInput, StripeWebhookOutput
from clarivex.application.ports.bot_notifier_port import BotNotifierPort
from clarivex.application.ports.entitlements_port import EntitlementsPort
from clarivex.application.ports.stripe_port import StripePort
from clarivex.domain.exceptions import DownstreamNotificationError, WebhookSignatureInvalidError

from .auth_common import utcnow


logger = logging.getLogger(__name__)

CHECKOUT_COMPLETED = "checkout.session.completed"


class ProcessStripeWebhookUseCase:
    def __init__(
        self,
        *,
        stripe_port: StripePort,
        entitlements_port: EntitlementsPort,
        bot_notifier_port: BotNotifierPort,
    ):
        self._stripe_port = stripe_port
        self._entitlements_port = entitlements_port
        self._bot_notifier_port = bot_notifier_port

    async def execute(self, command: StripeWebhookInput) -> StripeWebhookOutput:
        if not command.signature:
            raise WebhookSignatureInvalidError("Missing Stripe-Signature header.")
        event = self._stripe_port.verify_webhook(signature=command.signature, payload=command.payload)

        if event.event_type != CHECKOUT_COMPLETED or event.checkout_completed is None:
            logger.info(
                "stripe_webhook: ignored event_id=%s type=%s",
                event.event_id,
                event.event_type,
            )
            return StripeWebhookOutput(event_type=event.event_type, handled=False)

        external_id = event.checkout_completed.external_id
        if not external_id:
            logger.warning(
                "stripe_webhook: checkout_completed_without_discord_id event_id=%s",
                event.event_id,
            )
            return StripeWebhookOutput(event_type=event.event_type, handled=False)

        await asyncio.to_thread(
            self._entitlements_port.grant_premium,
            external_id=external_id,
            now=utcnow(),
        )
        claimed = await asyncio.to_thread(
            self._entitlements_port.claim_webhook_event,
            event_id=event.event_id,
            event_type=event.event_type,
            now=utcnow(),
        )
        if not claimed:
            logger.info(
                "stripe_webhook: duplicate event_id=%s discord_id=%s",
                event.event_id,
                external_id,
            )
            return StripeWebhookOutput(event_type=event.event_type, handled=False, duplicate=True)

        logger.info(
            "stripe_webhook: premium_granted event_id=%s discord_id=%s",
            event.event_id,
            external_id,
        )

        try:
            await self._bot_notifier_port.notify_premium(external_id=external_id)
        except DownstreamNotificationError as exc:
            logger.error(
                "stripe_webhook: bot_notification_failed event_id=%s discord_id=%s error=%s",
                event.event_id,
                external_id,
                exc,
            )
        else:
            await asyncio.to_thread(
                self._entitlements_port.mark_webhook_event_notified,
                event_id=event.event_id,
                now=utcnow(),
            )
            logger.info("stripe_webhook: bot_notified discord_id=%s", external_id)

        return StripeWebhookOutput(event_type=event.event_type, handled=True)
