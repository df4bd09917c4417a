"""
Recommendations feature: Schemas for the Crossroads screen.
"""

from pydantic import BaseModel


class VideoSummary(BaseModel):
    """A candidate path shown on the Crossroads."""
    id: str
    title: str | None = None
    description: str | None = None
    similarity: float | None = None  # set for semantic matches only


class RecommendationResult(BaseModel):
    success: bool
    recommendations: list[VideoSummary] = []
    message: str | None = None


class CrossroadsResponse(BaseModel):
    """The five choices offered after a video finishes."""
    next_step: VideoSummary | None = None  # next in series
    semantic_paths: list[VideoSummary] = []  # related A / B
    unknown_path: VideoSummary | None = None  # random
    show_map: bool = True  # the Logbook is always reachable
