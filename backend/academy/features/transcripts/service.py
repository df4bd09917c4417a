"""
Transcripts feature: searchable, timestamped transcript text.

Transcripts are stored as plain text with inline `[MM:SS]` markers, e.g.
"[00:00] Welcome. [01:23] Hip hinge basics."
"""

import re
from supabase import Client

from academy.core import telemetry
from academy.core.exceptions import VideoNotFoundError
from academy.features.transcripts.schemas import TranscriptLine

_TIMESTAMP_LINE = re.compile(r"\[(\d+):(\d+)\]\s*([^\[]+)")


def parse_transcript(text: str | None) -> list[TranscriptLine]:
    """Split transcript text on [MM:SS] markers.

    Without any marker the whole text becomes one line at 0s.
    """
    if not text:
        return []

    lines = [
        TranscriptLine(
            start_time=int(minutes) * 60 + int(seconds),
            text=body.strip(),
        )
        for minutes, seconds, body in _TIMESTAMP_LINE.findall(text)
    ]
    return lines or [TranscriptLine(start_time=0, text=text)]


def filter_lines(lines: list[TranscriptLine], query: str | None) -> list[TranscriptLine]:
    """Case-insensitive substring search."""
    if not query:
        return lines
    needle = query.lower()
    return [line for line in lines if needle in line.text.lower()]


class TranscriptService:

    def __init__(self, db: Client):
        self.db = db

    def get_transcript(self, video_id: str, query: str | None = None) -> list[TranscriptLine]:
        result = (
            self.db.table("videos")
            .select("transcript_text")
            .eq("id", video_id)
            .maybe_single()
            .execute()
        )
        video = result.data if result else None
        if video is None:
            raise VideoNotFoundError()
        return filter_lines(parse_transcript(video.get("transcript_text")), query)

    def record_asset_download(self, video_id: str, asset_type: str, user_id: str | None = None) -> None:
        telemetry.log_activity(
            self.db,
            telemetry.STUDY_ASSET_DOWNLOAD,
            telemetry.TRANSCRIPT_READER,
            {"video_id": video_id, "asset_type": asset_type},
            user_id=user_id,
        )
