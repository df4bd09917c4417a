"""
Recommendations feature: semantic "choose your own adventure" navigation.

Similarity ranking is done by the database (`match_videos` RPC over pgvector);
this layer only fetches the source vector, calls the RPC, and logs the event.
"""

import logging
import random
from supabase import Client

from academy.config import get_settings
from academy.core import telemetry
from academy.features.recommendations.schemas import (
    CrossroadsResponse,
    RecommendationResult,
    VideoSummary,
)

logger = logging.getLogger(__name__)


class RecommendationService:
    """Builds the Crossroads choices for a finished video."""

    def __init__(self, db: Client, rng: random.Random | None = None):
        self.db = db
        self.settings = get_settings()
        self.rng = rng or random.Random()

    def get_semantic_recommendations(
        self,
        video_id: str,
        limit: int | None = None,
        user_id: str | None = None,
    ) -> RecommendationResult:
        """Nearest-neighbour videos by transcript embedding.

        Args:
            video_id: The video the user just finished.
            limit: How many paths to return (defaults to RECOMMENDATION_COUNT).
            user_id: When known, the event is logged for behavioural analytics.
        """
        if limit is None:
            limit = self.settings.RECOMMENDATION_COUNT

        try:
            result = (
                self.db.table("videos")
                .select("embedding")
                .eq("id", video_id)
                .maybe_single()
                .execute()
            )
            current = result.data if result else None

            if not current or not current.get("embedding"):
                return RecommendationResult(
                    success=False,
                    message="No embedding found for current video.",
                )

            matches = self.db.rpc(
                "match_videos",
                {
                    "query_embedding": current["embedding"],
                    "match_threshold": self.settings.RECOMMENDATION_MATCH_THRESHOLD,
                    "match_count": limit,
                    "exclude_id": video_id,
                },
            ).execute()
            related = matches.data or []

        except Exception as e:
            logger.error(f"Recommendation engine error for {video_id}: {e}")
            return RecommendationResult(success=False)

        if user_id:
            telemetry.log_activity(
                self.db,
                telemetry.AI_RECOMMENDATION_GENERATED,
                telemetry.ADVENTURE_ENGINE,
                {
                    "source_video_id": video_id,
                    "recommendation_count": len(related),
                    "recommendation_ids": [v["id"] for v in related],
                },
                user_id=user_id,
            )

        return RecommendationResult(
            success=True,
            recommendations=[VideoSummary(**v) for v in related],
        )

    def get_random_path(self, exclude_id: str) -> VideoSummary | None:
        """A random published video other than the current one ("The Unknown Path")."""
        try:
            counted = (
                self.db.table("videos")
                .select("id", count="exact")
                .eq("is_published", True)
                .neq("id", exclude_id)
                .limit(1)
                .execute()
            )
            total = counted.count or 0
            if total == 0:
                return None

            offset = self.rng.randrange(total)
            result = (
                self.db.table("videos")
                .select("id, title, description")
                .eq("is_published", True)
                .neq("id", exclude_id)
                .order("id")
                .range(offset, offset)
                .execute()
            )
        except Exception as e:
            logger.error(f"Random path error: {e}")
            return None

        if not result.data:
            return None
        return VideoSummary(**result.data[0])

    def get_next_in_series(self, video_id: str) -> VideoSummary | None:
        """The following published video in the same chapter, by order_index."""
        try:
            result = (
                self.db.table("videos")
                .select("chapter_id, order_index")
                .eq("id", video_id)
                .maybe_single()
                .execute()
            )
            current = result.data if result else None
            if not current or current.get("chapter_id") is None:
                return None

            following = (
                self.db.table("videos")
                .select("id, title, description")
                .eq("chapter_id", current["chapter_id"])
                .eq("is_published", True)
                .gt("order_index", current.get("order_index") or 0)
                .order("order_index")
                .limit(1)
                .execute()
            )
        except Exception as e:
            logger.error(f"Next-in-series lookup failed for {video_id}: {e}")
            return None

        if not following.data:
            return None
        return VideoSummary(**following.data[0])

    def get_crossroads(self, video_id: str, user_id: str | None = None) -> CrossroadsResponse:
        """Assemble all Crossroads choices; each source degrades independently."""
        semantic = self.get_semantic_recommendations(video_id, user_id=user_id)
        return CrossroadsResponse(
            next_step=self.get_next_in_series(video_id),
            semantic_paths=semantic.recommendations if semantic.success else [],
            unknown_path=self.get_random_path(video_id),
        )
