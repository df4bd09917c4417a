"""
Payments feature: Schemas for request/response models.
"""

from pydantic import BaseModel


class CheckoutResponse(BaseModel):
    """Where to send the browser for Stripe-hosted checkout."""
    success: bool
    url: str | None = None
    message: str = ""


class WebhookAck(BaseModel):
    received: bool = True
