"""
Payments feature: Stripe Checkout and webhook processing.

Access is unlocked by a database trigger on `payments` inserts; this layer
only records what Stripe reports. Refunds revoke access on the profile.

Webhook payload styles:
  Snapshot (v1): the full object is included in event.data.object.
  Thin (v2):     only an id is included; the object is fetched from Stripe.
"""

import logging
import stripe
from stripe import StripeClient
from supabase import Client

from academy.config import get_settings
from academy.core.exceptions import PaymentGatewayError, WebhookError

logger = logging.getLogger(__name__)

CHECKOUT_COMPLETED_EVENTS = {
    "checkout.session.completed",
    "checkout.session.async_payment_succeeded",
}
CHARGE_REFUNDED = "charge.refunded"


def _as_dict(obj) -> dict | None:
    """Plain dict copy of a Stripe object; current SDKs no longer subclass dict."""
    if obj is None or isinstance(obj, dict):
        return obj
    return obj.to_dict()


def _event_object(event) -> tuple[dict | None, str | None]:
    """Split an event into (snapshot object, thin object id).

    Stripe objects always carry an "object" type field; a payload without
    one is a thin reference.
    """
    data = event.get("data") or {}
    obj = data.get("object")
    if obj and obj.get("object"):
        return obj, None

    object_id = (obj or {}).get("id")
    if not object_id:
        object_id = (event.get("related_object") or {}).get("id")
    return None, object_id


class PaymentService:
    """Checkout session creation and webhook side effects."""

    def __init__(self, db: Client, stripe_client: StripeClient):
        self.db = db
        self.stripe = stripe_client
        self.settings = get_settings()

    # ── Checkout ─────────────────────────────────────────

    def get_customer_email(self, user_id: str) -> str | None:
        result = (
            self.db.table("profiles")
            .select("email")
            .eq("id", user_id)
            .maybe_single()
            .execute()
        )
        profile = result.data if result else None
        return profile.get("email") if profile else None

    def create_checkout_session(self, user_id: str, email: str | None, origin: str) -> str:
        """Create a Stripe Checkout Session for the course and return its URL.

        Raises:
            PaymentGatewayError: If Stripe fails or returns no URL.
        """
        settings = self.settings
        product_data = {
            "name": settings.COURSE_PRODUCT_NAME,
            "description": settings.COURSE_PRODUCT_DESCRIPTION,
        }
        if settings.COURSE_PRODUCT_IMAGE:
            product_data["images"] = [settings.COURSE_PRODUCT_IMAGE]

        params = {
            "line_items": [
                {
                    "price_data": {
                        "currency": settings.COURSE_CURRENCY,
                        "product_data": product_data,
                        "unit_amount": settings.COURSE_PRICE_CENTS,
                    },
                    "quantity": 1,
                }
            ],
            "mode": "payment",
            "success_url": f"{origin}/dashboard?session_id={{CHECKOUT_SESSION_ID}}&payment=success",
            "cancel_url": f"{origin}/?payment=cancelled",
            # The webhook identifies the buyer through this
            "metadata": {"userId": user_id},
        }
        if email:
            params["customer_email"] = email

        try:
            session = self.stripe.checkout.sessions.create(params=params)
        except stripe.StripeError as e:
            logger.error(f"Stripe session error: {e}")
            raise PaymentGatewayError(str(e)) from e

        if not session.url:
            logger.error(f"Stripe session {session.id} has no URL")
            raise PaymentGatewayError("Failed to create stripe session url")

        return session.url

    # ── Webhook ──────────────────────────────────────────

    def construct_event(self, payload: bytes, signature: str | None):
        """Verify the Stripe-Signature header and parse the event.

        Raises:
            WebhookError(400): On a bad signature or malformed payload.
        """
        try:
            return self.stripe.construct_event(
                payload,
                signature or "",
                self.settings.STRIPE_WEBHOOK_SECRET,
            )
        except (ValueError, stripe.SignatureVerificationError) as e:
            logger.error(f"Webhook signature verification failed: {e}")
            raise WebhookError(f"Webhook Error: {e}", status_code=400) from e

    def handle_event(self, event) -> None:
        """Apply the side effects of a verified event.

        Raises:
            WebhookError: 400 for unusable payloads, 500 when the DB write fails.
        """
        event = _as_dict(event)
        event_type = event.get("type")

        if event_type in CHECKOUT_COMPLETED_EVENTS:
            self._handle_checkout_completed(event)
        elif event_type == CHARGE_REFUNDED:
            self._handle_charge_refunded(event)
        else:
            logger.info(f"Unhandled event type: {event_type}")

    def _handle_checkout_completed(self, event) -> None:
        session, session_id = _event_object(event)
        if session is None:
            if not session_id:
                raise WebhookError("Missing object", status_code=400)
            logger.info(f"Processing thin payload for event: {event.get('id')}")
            session = _as_dict(self.stripe.checkout.sessions.retrieve(
                session_id, params={"expand": ["line_items"]}
            ))

        user_id = (session.get("metadata") or {}).get("userId")
        if not user_id:
            logger.error("Webhook error: no userId found in session metadata")
            raise WebhookError("Missing metadata", status_code=400)

        customer = session.get("customer")
        if customer is not None and not isinstance(customer, str):
            customer = customer.get("id")

        try:
            self.db.table("payments").insert({
                "user_id": user_id,
                "stripe_session_id": session.get("id"),
                "stripe_customer_id": customer,
                "amount_total": session.get("amount_total"),
                "currency": session.get("currency"),
                "status": "complete",
            }).execute()
        except Exception as e:
            logger.error(f"Database sync error for session {session.get('id')}: {e}")
            raise WebhookError("Internal Server Error", status_code=500) from e

        logger.info(f"💳 Payment processed for user: {user_id}")

    def _find_session_id_for_payment_intent(self, payment_intent: str | None) -> str | None:
        if not payment_intent:
            return None
        sessions = self.stripe.checkout.sessions.list(
            params={"payment_intent": payment_intent, "limit": 1}
        )
        return sessions.data[0].id if sessions.data else None

    def _handle_charge_refunded(self, event) -> None:
        charge, charge_id = _event_object(event)
        if charge is None:
            if not charge_id:
                raise WebhookError("Missing object", status_code=400)
            charge = _as_dict(self.stripe.charges.retrieve(charge_id))

        payment_intent = charge.get("payment_intent")
        if payment_intent is not None and not isinstance(payment_intent, str):
            payment_intent = payment_intent.get("id")

        session_id = self._find_session_id_for_payment_intent(payment_intent)
        if not session_id:
            logger.warning(f"Refund for unknown payment intent: {payment_intent}")
            return

        result = (
            self.db.table("payments")
            .select("user_id")
            .eq("stripe_session_id", session_id)
            .maybe_single()
            .execute()
        )
        payment = result.data if result else None
        if not payment:
            logger.warning(f"Refund for session without payment row: {session_id}")
            return

        try:
            self.db.table("profiles").update(
                {"is_paid": False}
            ).eq("id", payment["user_id"]).execute()
            self.db.table("payments").update(
                {"status": "refunded"}
            ).eq("stripe_session_id", session_id).execute()
        except Exception as e:
            logger.error(f"Failed to revoke access for {payment['user_id']}: {e}")
            raise WebhookError("Internal Server Error", status_code=500) from e

        logger.info(f"Access revoked for refunded user: {payment['user_id']}")
