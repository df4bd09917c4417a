"""
Admin feature: API routes for the command center.
All routes require a profile with role 'admin'.
"""

from fastapi import APIRouter, BackgroundTasks, Depends, Query
from supabase import Client

from academy.background.embedding_tasks import run_bulk_indexing
from academy.core.dependencies import get_db, require_admin
from academy.core.schemas import ActionResult
from academy.features.admin.schemas import ActivityLogEntry, AdminStats, BulkIndexAccepted
from academy.features.admin.service import AdminService
from academy.features.auth.schemas import ProfileResponse
from academy.features.embeddings.service import EmbeddingService

router = APIRouter()


@router.get("/stats", response_model=AdminStats)
async def get_stats(
    admin_id: str = Depends(require_admin),
    db: Client = Depends(get_db),
):
    """User/video counts and how many videos the AI engine cannot see yet."""
    return AdminService(db).get_stats()


@router.get("/logs", response_model=list[ActivityLogEntry])
async def get_logs(
    limit: int = Query(10, ge=1, le=100),
    admin_id: str = Depends(require_admin),
    db: Client = Depends(get_db),
):
    """Live telemetry feed."""
    return AdminService(db).get_recent_logs(limit)


@router.get("/users", response_model=list[ProfileResponse])
async def lookup_users(
    q: str,
    admin_id: str = Depends(require_admin),
    db: Client = Depends(get_db),
):
    """Athlete lookup by user id or email."""
    return AdminService(db).lookup_user(q)


@router.post("/videos/{video_id}/embedding", response_model=ActionResult)
async def index_video(
    video_id: str,
    admin_id: str = Depends(require_admin),
    db: Client = Depends(get_db),
):
    """Generate the transcript embedding for a single video now."""
    return EmbeddingService(db).process_video_embedding(video_id)


@router.post("/embeddings/bulk", response_model=BulkIndexAccepted, status_code=202)
async def bulk_index(
    background_tasks: BackgroundTasks,
    admin_id: str = Depends(require_admin),
    db: Client = Depends(get_db),
):
    """Index every pending published video in the background.

    Videos are processed sequentially to respect the embedding rate limit,
    so the request returns before the work is done.
    """
    pending = len(EmbeddingService(db).list_pending_video_ids())
    if pending == 0:
        return BulkIndexAccepted(message="All videos indexed.", pending=0)

    background_tasks.add_task(run_bulk_indexing)
    return BulkIndexAccepted(message=f"Indexing {pending} videos in the background.", pending=pending)
