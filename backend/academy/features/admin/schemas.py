"""
Admin feature: Schemas for the command center.
"""

from pydantic import BaseModel
from datetime import datetime


class AdminStats(BaseModel):
    users: int
    videos: int
    pending_embeddings: int
    indexed_videos: int


class ActivityLogEntry(BaseModel):
    id: str | int | None = None
    event_type: str
    context: str | None = None
    metadata: dict = {}
    user_id: str | None = None
    created_at: datetime | None = None
    is_failure: bool = False


class BulkIndexAccepted(BaseModel):
    success: bool = True
    message: str
    pending: int
