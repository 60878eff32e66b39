from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Header, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from clarivex.api.deps import (
    get_create_checkout_session_use_case,
    get_current_session,
    get_process_stripe_webhook_use_case,
)
from clarivex.api.schemas.billing import (
    CheckoutErrorResponse,
    CreateCheckoutSessionResponse,
    StripeWebhookResponse,
)
from clarivex.application.dto.billing import StripeWebhookInput
from clarivex.application.use_cases.create_checkout_session import CreateCheckoutSessionUseCase
from clarivex.application.use_cases.process_stripe_webhook import ProcessStripeWebhookUseCase
from clarivex.domain.entities.identity import UserSession
from clarivex.domain.exceptions import PaymentProviderError, WebhookSignatureInvalidError


logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/create-checkout-session",
    response_model=CreateCheckoutSessionResponse,
    responses={500: {"model": CheckoutErrorResponse}},
)
async def create_checkout_session(
    session: UserSession = Depends(get_current_session),
    use_case: CreateCheckoutSessionUseCase = Depends(get_create_checkout_session_use_case),
):
    try:
        output = await use_case.execute(identity=session.identity)
    except PaymentProviderError as exc:
        logger.error(
            "billing: create_checkout_session_failed discord_id=%s error=%s",
            session.identity.external_id,
            exc,
        )
        return JSONResponse(status_code=500, content={"error": str(exc)})

    return CreateCheckoutSessionResponse(sessionId=output.session_id, url=output.url)


@router.post("/stripe-webhook", response_model=StripeWebhookResponse)
async def stripe_webhook(
    request: Request,
    stripe_signature: str | None = Header(default=None, alias="Stripe-Signature"),
    use_case: ProcessStripeWebhookUseCase = Depends(get_process_stripe_webhook_use_case),
):
    payload = await request.body()
    try:
        output = await use_case.execute(
            StripeWebhookInput(
                signature=stripe_signature,
                payload=payload,
            )
        )
    except WebhookSignatureInvalidError as exc:
        logger.warning("billing: stripe_webhook_rejected error=%s", exc)
        return PlainTextResponse(f"Webhook Error: {exc}", status_code=400)

    return StripeWebhookResponse(
        event_type=output.event_type,
        handled=output.handled,
        duplicate=output.duplicate,
    )
