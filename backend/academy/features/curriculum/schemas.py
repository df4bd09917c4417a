"""
Curriculum feature: Schemas for the Logbook (trail map).
"""

from pydantic import BaseModel


class LogbookVideo(BaseModel):
    id: str
    title: str | None = None
    order_index: int = 0
    is_opener: bool = False
    completed: bool = False
    locked: bool = True  # rendered with a lock until watched (openers are always open)


class LogbookChapter(BaseModel):
    id: str
    title: str | None = None
    order_index: int = 0
    videos: list[LogbookVideo] = []


class LogbookSection(BaseModel):
    id: str
    title: str | None = None
    order_index: int = 0
    chapters: list[LogbookChapter] = []


class LogbookResponse(BaseModel):
    sections: list[LogbookSection]
    completed_count: int
    total_videos: int
