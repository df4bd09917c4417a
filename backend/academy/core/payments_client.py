"""
Stripe SDK setup for server-side operations.
"""

from functools import lru_cache
from stripe import StripeClient

from academy.config import get_settings


@lru_cache
def get_stripe_client() -> StripeClient:
    """Get the Stripe client (singleton).

    Raises:
        ValueError: If STRIPE_SECRET_KEY is not configured.
    """
    settings = get_settings()
    if not settings.STRIPE_SECRET_KEY:
        raise ValueError("STRIPE_SECRET_KEY not configured")

    if settings.STRIPE_API_VERSION:
        return StripeClient(settings.STRIPE_SECRET_KEY, stripe_version=settings.STRIPE_API_VERSION)
    return StripeClient(settings.STRIPE_SECRET_KEY)
