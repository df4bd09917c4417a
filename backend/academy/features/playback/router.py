"""
Playback feature: API routes for the video player.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from supabase import Client

from academy.core.dependencies import get_db, get_current_user_id
from academy.core.exceptions import (
    AccessDeniedError,
    SignedUrlError,
    VideoNotFoundError,
    app_error_to_http,
)
from academy.features.playback.schemas import (
    OpenerVideo,
    ProgressRequest,
    VideoUrlResponse,
    WatchProgress,
)
from academy.features.playback.service import PlaybackService

router = APIRouter()


@router.get("/opener", response_model=OpenerVideo)
async def get_opener(
    user_id: str = Depends(get_current_user_id),
    db: Client = Depends(get_db),
):
    """First video of the adventure."""
    service = PlaybackService(db)
    opener = service.get_opener_video()
    if opener is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No opener video configured")
    return opener


@router.get("/{video_id}/url", response_model=VideoUrlResponse)
async def get_video_url(
    video_id: str,
    user_id: str = Depends(get_current_user_id),
    db: Client = Depends(get_db),
):
    """Signed playback URL, gated by the user's purchase/permissions."""
    service = PlaybackService(db)
    try:
        url = service.get_authorized_video_url(user_id, video_id)
    except AccessDeniedError as e:
        raise app_error_to_http(e, status.HTTP_403_FORBIDDEN)
    except VideoNotFoundError as e:
        raise app_error_to_http(e, status.HTTP_404_NOT_FOUND)
    except SignedUrlError as e:
        raise app_error_to_http(e, status.HTTP_502_BAD_GATEWAY)

    return VideoUrlResponse(url=url, expires_in=service.settings.SIGNED_URL_TTL_SECONDS)


@router.post("/{video_id}/progress", response_model=WatchProgress)
async def record_progress(
    video_id: str,
    data: ProgressRequest,
    user_id: str = Depends(get_current_user_id),
    db: Client = Depends(get_db),
):
    """Report playback progress (percentage)."""
    service = PlaybackService(db)
    return service.record_progress(user_id, video_id, data.progress)
