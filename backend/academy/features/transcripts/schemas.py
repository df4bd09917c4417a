"""
Transcripts feature: Schemas for request/response models.
"""

from typing import Literal
from pydantic import BaseModel


class TranscriptLine(BaseModel):
    start_time: int  # seconds
    text: str


class TranscriptResponse(BaseModel):
    video_id: str
    lines: list[TranscriptLine]
    total_lines: int


class AssetDownloadRequest(BaseModel):
    asset_type: Literal["transcript", "guide"]
