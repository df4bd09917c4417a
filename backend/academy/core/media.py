"""
Cloudinary wrapper: time-limited signed URLs for private curriculum videos.
"""

import logging
import time
from functools import lru_cache

import cloudinary
import cloudinary.utils

from academy.config import get_settings
from academy.core.exceptions import SignedUrlError

logger = logging.getLogger(__name__)


@lru_cache
def configure_cloudinary() -> None:
    """Apply Cloudinary credentials once per process."""
    settings = get_settings()
    cloudinary.config(
        cloud_name=settings.CLOUDINARY_CLOUD_NAME,
        api_key=settings.CLOUDINARY_API_KEY,
        api_secret=settings.CLOUDINARY_API_SECRET,
        secure=True,
    )


def get_signed_video_url(public_id: str, ttl: int | None = None) -> str:
    """Generate a time-limited signed URL for a private Cloudinary video.

    Args:
        public_id: The Cloudinary public ID (e.g. 'academy/chapter1/lesson1').
        ttl: Time to live in seconds (defaults to SIGNED_URL_TTL_SECONDS).

    Raises:
        SignedUrlError: If the SDK cannot sign the URL.
    """
    configure_cloudinary()
    if ttl is None:
        ttl = get_settings().SIGNED_URL_TTL_SECONDS

    try:
        return cloudinary.utils.private_download_url(
            public_id,
            "mp4",
            resource_type="video",
            expires_at=int(time.time()) + ttl,
        )
    except Exception as e:
        logger.error(f"Cloudinary signed URL error for {public_id}: {e}")
        raise SignedUrlError(str(e)) from e
