"""
Auth feature: passwordless sign-in and profile lookup.

Authentication itself is Supabase's: this layer asks it to email a magic
link and reads the `profiles` row that Supabase keeps per user.
"""

import logging
from supabase import Client

from academy.core.schemas import ActionResult
from academy.features.auth.schemas import ProfileResponse

logger = logging.getLogger(__name__)


class AuthService:
    """Magic-link sign-in and profile management."""

    def __init__(self, db: Client):
        self.db = db

    def send_magic_link(self, email: str, redirect_to: str) -> ActionResult:
        """Email a one-time sign-in link.

        Supabase rejections (rate limits, invalid address) come back as
        their own message; anything else means the service is down.
        """
        try:
            self.db.auth.sign_in_with_otp({
                "email": email,
                "options": {"email_redirect_to": redirect_to},
            })
        except Exception as e:
            if getattr(e, "status", None) is not None:
                return ActionResult(success=False, message=getattr(e, "message", None) or str(e))
            logger.error(f"Magic link failed for {email}: {e}")
            return ActionResult(
                success=False,
                message="Authentication service is temporarily unavailable.",
            )

        return ActionResult(
            success=True,
            message=(
                "Check your email for the magic login link! "
                "Verify your spam folder if it doesn't arrive shortly."
            ),
        )

    def get_profile(self, user_id: str) -> ProfileResponse | None:
        result = (
            self.db.table("profiles")
            .select("id, email, role, is_paid")
            .eq("id", user_id)
            .maybe_single()
            .execute()
        )
        profile = result.data if result else None
        if not profile:
            return None
        return ProfileResponse(**{k: v for k, v in profile.items() if v is not None})
