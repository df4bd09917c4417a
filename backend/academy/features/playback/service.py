"""
Playback feature: access gate and watch progress.

Access control is hierarchical (Global > Section > Chapter > Video) and
evaluated entirely by the `check_resource_access` database procedure.
"""

import logging
from datetime import datetime, timezone
from supabase import Client

from academy.config import get_settings
from academy.core.exceptions import AccessDeniedError, VideoNotFoundError
from academy.core.media import get_signed_video_url
from academy.features.playback.schemas import OpenerVideo, WatchProgress

logger = logging.getLogger(__name__)


class PlaybackService:
    """Authorizes playback and tracks how far users got."""

    def __init__(self, db: Client):
        self.db = db
        self.settings = get_settings()

    def check_access(self, user_id: str, video_id: str) -> bool:
        """Ask the database whether the user may watch the video."""
        result = self.db.rpc(
            "check_resource_access",
            {"u_id": user_id, "v_id": video_id},
        ).execute()
        return bool(result.data)

    def get_authorized_video_url(self, user_id: str, video_id: str) -> str:
        """Return a signed URL for the video if the user has access.

        Raises:
            AccessDeniedError: If the access check fails or refuses.
            VideoNotFoundError: If the video row has no media asset.
            SignedUrlError: If the CDN cannot sign the link.
        """
        try:
            has_access = self.check_access(user_id, video_id)
        except Exception as e:
            logger.error(f"Access check failed for user {user_id}, video {video_id}: {e}")
            raise AccessDeniedError() from e

        if not has_access:
            raise AccessDeniedError()

        result = (
            self.db.table("videos")
            .select("cloudinary_public_id")
            .eq("id", video_id)
            .maybe_single()
            .execute()
        )
        video = result.data if result else None
        if not video or not video.get("cloudinary_public_id"):
            raise VideoNotFoundError()

        return get_signed_video_url(video["cloudinary_public_id"])

    def get_opener_video(self) -> OpenerVideo | None:
        """The entry point of the adventure."""
        result = (
            self.db.table("videos")
            .select("id, title")
            .eq("is_opener", True)
            .order("order_index")
            .limit(1)
            .execute()
        )
        if not result.data:
            return None
        return OpenerVideo(**result.data[0])

    def record_progress(self, user_id: str, video_id: str, progress: float) -> WatchProgress:
        """Upsert the user's watch_history row.

        Stored progress is the furthest point reached. A video counts as
        completed once progress reaches WATCH_COMPLETION_THRESHOLD;
        completion is never reverted.
        """
        progress = max(0.0, min(100.0, progress))

        existing = (
            self.db.table("watch_history")
            .select("progress, completed")
            .eq("user_id", user_id)
            .eq("video_id", video_id)
            .maybe_single()
            .execute()
        )
        previous = existing.data if existing else None

        completed = progress >= self.settings.WATCH_COMPLETION_THRESHOLD
        if previous:
            completed = completed or bool(previous.get("completed"))
            progress = max(progress, float(previous.get("progress") or 0))

        row = {
            "user_id": user_id,
            "video_id": video_id,
            "progress": progress,
            "completed": completed,
            "updated_at": datetime.now(timezone.utc).isoformat(),
        }
        self.db.table("watch_history").upsert(row, on_conflict="user_id,video_id").execute()

        return WatchProgress(**row)
