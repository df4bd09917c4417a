"""
Curriculum feature: full section → chapter → video tree with user progress.
"""

from supabase import Client

from academy.features.curriculum.schemas import (
    LogbookChapter,
    LogbookResponse,
    LogbookSection,
    LogbookVideo,
)

CURRICULUM_SELECT = """
    id, title, order_index,
    chapters (
        id, title, order_index,
        videos (
            id, title, order_index, is_opener
        )
    )
"""


def _by_order(rows: list[dict] | None) -> list[dict]:
    return sorted(rows or [], key=lambda r: r.get("order_index") or 0)


class CurriculumService:
    """Read-only views over the course structure."""

    def __init__(self, db: Client):
        self.db = db

    def get_completed_video_ids(self, user_id: str) -> set[str]:
        result = (
            self.db.table("watch_history")
            .select("video_id")
            .eq("user_id", user_id)
            .eq("completed", True)
            .execute()
        )
        return {row["video_id"] for row in (result.data or [])}

    def get_logbook(self, user_id: str) -> LogbookResponse:
        """Curriculum ordered by order_index at every level, flagged with progress."""
        sections = (
            self.db.table("sections")
            .select(CURRICULUM_SELECT)
            .order("order_index")
            .execute()
        )
        completed_ids = self.get_completed_video_ids(user_id)

        result_sections = []
        total = 0
        done = 0
        for section in _by_order(sections.data):
            chapters = []
            for chapter in _by_order(section.get("chapters")):
                videos = []
                for video in _by_order(chapter.get("videos")):
                    is_completed = video["id"] in completed_ids
                    is_opener = bool(video.get("is_opener"))
                    videos.append(LogbookVideo(
                        id=video["id"],
                        title=video.get("title"),
                        order_index=video.get("order_index") or 0,
                        is_opener=is_opener,
                        completed=is_completed,
                        locked=not is_opener and not is_completed,
                    ))
                    total += 1
                    done += is_completed
                chapters.append(LogbookChapter(
                    id=chapter["id"],
                    title=chapter.get("title"),
                    order_index=chapter.get("order_index") or 0,
                    videos=videos,
                ))
            result_sections.append(LogbookSection(
                id=section["id"],
                title=section.get("title"),
                order_index=section.get("order_index") or 0,
                chapters=chapters,
            ))

        return LogbookResponse(
            sections=result_sections,
            completed_count=done,
            total_videos=total,
        )
