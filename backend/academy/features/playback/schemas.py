"""
Playback feature: Schemas for request/response models.
"""

from pydantic import BaseModel, Field
from datetime import datetime


class VideoUrlResponse(BaseModel):
    """Signed, time-limited playback link."""
    success: bool = True
    url: str
    expires_in: int


class OpenerVideo(BaseModel):
    id: str
    title: str | None = None


class ProgressRequest(BaseModel):
    """Percentage of the video watched so far."""
    progress: float = Field(..., ge=0, le=100)


class WatchProgress(BaseModel):
    video_id: str
    progress: float
    completed: bool
    updated_at: datetime | None = None
