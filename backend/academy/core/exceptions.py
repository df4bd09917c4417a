"""
Custom exception classes for unified error handling.
"""

from fastapi import HTTPException


class AppBaseError(Exception):
    """Base exception for all application errors."""
    def __init__(self, message: str, detail: str | None = None):
        self.message = message
        self.detail = detail
        super().__init__(message)


class AccessDeniedError(AppBaseError):
    """Raised when the access-control RPC refuses a video."""
    def __init__(self, message: str = "Access Denied: Payment Required"):
        super().__init__(
            message=message,
            detail="Unlock the full journey to watch this video.",
        )


class VideoNotFoundError(AppBaseError):
    """Raised when a video row does not exist."""
    def __init__(self, message: str = "Video not found"):
        super().__init__(message=message)


class EmbeddingError(AppBaseError):
    """Raised when the embedding API fails or returns nothing usable."""
    def __init__(self, original_error: str | None = None):
        super().__init__(
            message="Failed to generate AI embedding for transcript.",
            detail=original_error,
        )


class SignedUrlError(AppBaseError):
    """Raised when the media CDN SDK cannot sign a URL."""
    def __init__(self, original_error: str | None = None):
        super().__init__(
            message="Failed to generate secure video link.",
            detail=original_error,
        )


class PaymentGatewayError(AppBaseError):
    """Raised when Stripe is unreachable or returns an unusable session."""
    def __init__(self, original_error: str | None = None):
        super().__init__(
            message="Payment gateway is currently unavailable. Please try again later.",
            detail=original_error,
        )


class WebhookError(AppBaseError):
    """Raised when a webhook payload cannot be verified or processed.

    Carries the HTTP status the provider should see.
    """
    def __init__(self, message: str, status_code: int = 400):
        self.status_code = status_code
        super().__init__(message=message)


# ── Utility: convert to HTTPException ────────────────────

def app_error_to_http(error: AppBaseError, status_code: int = 400) -> HTTPException:
    """Convert an AppBaseError to an HTTPException with consistent JSON body."""
    return HTTPException(
        status_code=status_code,
        detail={
            "error": error.message,
            "detail": error.detail,
            "type": type(error).__name__,
        },
    )
