"""
Transcripts feature: API routes for the transcript reader.
"""

from fastapi import APIRouter, Depends, status
from supabase import Client

from academy.core.dependencies import get_db, get_current_user_id
from academy.core.exceptions import VideoNotFoundError, app_error_to_http
from academy.core.schemas import ActionResult
from academy.features.transcripts.schemas import AssetDownloadRequest, TranscriptResponse
from academy.features.transcripts.service import TranscriptService

router = APIRouter()


@router.get("/{video_id}", response_model=TranscriptResponse)
async def get_transcript(
    video_id: str,
    q: str | None = None,
    user_id: str = Depends(get_current_user_id),
    db: Client = Depends(get_db),
):
    """Timestamped transcript lines, optionally filtered by `q`."""
    service = TranscriptService(db)
    try:
        lines = service.get_transcript(video_id, q)
    except VideoNotFoundError as e:
        raise app_error_to_http(e, status.HTTP_404_NOT_FOUND)
    return TranscriptResponse(video_id=video_id, lines=lines, total_lines=len(lines))


@router.post("/{video_id}/downloads", response_model=ActionResult)
async def record_download(
    video_id: str,
    data: AssetDownloadRequest,
    user_id: str = Depends(get_current_user_id),
    db: Client = Depends(get_db),
):
    """Record a study asset download (transcript or guide)."""
    service = TranscriptService(db)
    service.record_asset_download(video_id, data.asset_type, user_id=user_id)
    return ActionResult(success=True, message="Download recorded.")
