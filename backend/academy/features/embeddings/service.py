"""
Embeddings feature: transcript indexing pipeline for the recommendation engine.

Flow per video: fetch transcript → telemetry START → embed (Gemini) →
store vector on the video row → telemetry SUCCESS (or FAILURE).
"""

import logging
import time
from supabase import Client

from academy.config import get_settings
from academy.core import telemetry
from academy.core.schemas import ActionResult
from academy.features.embeddings.embedding import build_video_document, generate_embedding
from academy.features.embeddings.schemas import BulkEmbeddingResult

logger = logging.getLogger(__name__)


def _error_message(error: Exception) -> str:
    # postgrest APIError carries .message; everything else falls back to str()
    return getattr(error, "message", None) or str(error)


class EmbeddingService:
    """Generates and stores transcript embeddings."""

    def __init__(self, db: Client):
        self.db = db
        self.settings = get_settings()

    def process_video_embedding(self, video_id: str) -> ActionResult:
        """Generate and store the transcript embedding for one video."""
        try:
            result = (
                self.db.table("videos")
                .select("title, transcript_text")
                .eq("id", video_id)
                .maybe_single()
                .execute()
            )
            video = result.data if result else None
        except Exception as e:
            logger.error(f"Failed to load video {video_id}: {e}")
            video = None

        if not video:
            return ActionResult(success=False, message="Video or transcript not found.")

        if not video.get("transcript_text"):
            return ActionResult(success=False, message="Video has no transcript to process.")

        telemetry.log_activity(
            self.db,
            telemetry.AI_EMBEDDING_START,
            telemetry.GEMINI_PIPELINE,
            {"video_id": video_id, "video_title": video["title"]},
        )

        try:
            embedding = generate_embedding(
                build_video_document(video["title"], video["transcript_text"])
            )

            self.db.table("videos").update(
                {"embedding": embedding}
            ).eq("id", video_id).execute()

        except Exception as e:
            message = _error_message(e)
            logger.error(f"Embedding pipeline failure for {video_id}: {message}")
            telemetry.log_activity(
                self.db,
                telemetry.AI_EMBEDDING_FAILURE,
                telemetry.GEMINI_PIPELINE,
                {"video_id": video_id, "error": message},
            )
            return ActionResult(success=False, message=f"Failed to process embedding: {message}")

        telemetry.log_activity(
            self.db,
            telemetry.AI_EMBEDDING_SUCCESS,
            telemetry.GEMINI_PIPELINE,
            {"video_id": video_id, "dimension": len(embedding)},
        )
        logger.info(f"✅ Embedded video {video_id} ({len(embedding)} dims)")

        return ActionResult(
            success=True,
            message=f"Successfully generated embedding for: {video['title']}",
        )

    def list_pending_video_ids(self) -> list[str]:
        """Published videos that the recommendation engine cannot see yet."""
        result = (
            self.db.table("videos")
            .select("id")
            .is_("embedding", "null")
            .eq("is_published", True)
            .execute()
        )
        return [row["id"] for row in (result.data or [])]

    def count_pending(self) -> int:
        """Count all videos (published or not) still missing an embedding."""
        result = (
            self.db.table("videos")
            .select("id", count="exact")
            .is_("embedding", "null")
            .limit(1)
            .execute()
        )
        return result.count or 0

    def bulk_process_embeddings(self) -> BulkEmbeddingResult:
        """Index every pending published video, one at a time.

        Items are processed sequentially with EMBEDDING_RATE_LIMIT_DELAY
        seconds between calls to stay under the embedding API's rate limit.
        """
        try:
            pending = self.list_pending_video_ids()
        except Exception as e:
            logger.error(f"Bulk indexing could not list pending videos: {e}")
            return BulkEmbeddingResult(
                success=False,
                message=f"AI indexing service unavailable. Error: {_error_message(e)}",
            )

        if not pending:
            return BulkEmbeddingResult(success=True, message="All videos indexed.")

        logger.info(f"🚀 Bulk indexing {len(pending)} videos")
        processed = 0
        failed_ids: list[str] = []

        for index, video_id in enumerate(pending):
            if index > 0 and self.settings.EMBEDDING_RATE_LIMIT_DELAY > 0:
                time.sleep(self.settings.EMBEDDING_RATE_LIMIT_DELAY)

            outcome = self.process_video_embedding(video_id)
            if outcome.success:
                processed += 1
            else:
                failed_ids.append(video_id)

        message = f"Successfully processed {processed} videos."
        if failed_ids:
            message += f" {len(failed_ids)} failed."

        return BulkEmbeddingResult(
            success=not failed_ids,
            message=message,
            processed=processed,
            failed=len(failed_ids),
            failed_ids=failed_ids,
        )
