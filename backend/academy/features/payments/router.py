"""
Payments feature: checkout route and the Stripe webhook endpoint.
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse
from stripe import StripeClient
from supabase import Client

from academy.core.dependencies import get_db, get_optional_user_id, get_stripe
from academy.core.exceptions import PaymentGatewayError, WebhookError
from academy.features.payments.schemas import CheckoutResponse, WebhookAck
from academy.features.payments.service import PaymentService

router = APIRouter()
webhook_router = APIRouter()


@router.post("/checkout", response_model=CheckoutResponse)
async def create_checkout_session(
    request: Request,
    user_id: str | None = Depends(get_optional_user_id),
    db: Client = Depends(get_db),
    stripe_client: StripeClient = Depends(get_stripe),
):
    """Start Stripe-hosted checkout for full academy access.

    The client redirects the browser to the returned `url`.
    """
    if not user_id:
        return CheckoutResponse(
            success=False,
            message="Please sign in to purchase the Academy access.",
        )

    service = PaymentService(db, stripe_client)
    origin = (request.headers.get("origin") or service.settings.SITE_URL).rstrip("/")

    try:
        email = service.get_customer_email(user_id)
        url = service.create_checkout_session(user_id, email, origin)
    except PaymentGatewayError as e:
        return CheckoutResponse(success=False, message=e.message)

    return CheckoutResponse(success=True, url=url)


@webhook_router.post("/stripe", response_model=WebhookAck)
async def stripe_webhook(
    request: Request,
    db: Client = Depends(get_db),
    stripe_client: StripeClient = Depends(get_stripe),
):
    """Receive signed events from Stripe.

    Signature verification needs the raw, unparsed body.
    """
    payload = await request.body()
    signature = request.headers.get("stripe-signature")

    service = PaymentService(db, stripe_client)
    try:
        event = service.construct_event(payload, signature)
        service.handle_event(event)
    except WebhookError as e:
        return PlainTextResponse(e.message, status_code=e.status_code)

    return WebhookAck()
