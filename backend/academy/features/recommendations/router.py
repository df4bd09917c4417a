"""
Recommendations feature: API routes for the Crossroads screen.
"""

from fastapi import APIRouter, Depends, Query
from supabase import Client

from academy.core.dependencies import get_db, get_current_user_id
from academy.features.recommendations.schemas import (
    CrossroadsResponse,
    RecommendationResult,
    VideoSummary,
)
from academy.features.recommendations.service import RecommendationService

router = APIRouter()


@router.get("/{video_id}", response_model=RecommendationResult)
async def semantic_recommendations(
    video_id: str,
    limit: int = Query(2, ge=1, le=10),
    user_id: str = Depends(get_current_user_id),
    db: Client = Depends(get_db),
):
    """Semantically related videos ("Related A / B")."""
    service = RecommendationService(db)
    return service.get_semantic_recommendations(video_id, limit, user_id=user_id)


@router.get("/{video_id}/random", response_model=VideoSummary | None)
async def random_path(
    video_id: str,
    user_id: str = Depends(get_current_user_id),
    db: Client = Depends(get_db),
):
    """The Unknown Path: any other published video."""
    service = RecommendationService(db)
    return service.get_random_path(video_id)


@router.get("/{video_id}/crossroads", response_model=CrossroadsResponse)
async def crossroads(
    video_id: str,
    user_id: str = Depends(get_current_user_id),
    db: Client = Depends(get_db),
):
    """All choices shown once a video ends."""
    service = RecommendationService(db)
    return service.get_crossroads(video_id, user_id=user_id)
