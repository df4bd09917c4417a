"""
Admin feature: system health, telemetry feed, and user lookup.
"""

import uuid
from supabase import Client

from academy.core.telemetry import is_failure_event
from academy.features.admin.schemas import ActivityLogEntry, AdminStats
from academy.features.auth.schemas import ProfileResponse
from academy.features.embeddings.service import EmbeddingService


def _escape_like(value: str) -> str:
    """Make LIKE wildcards in user input match literally."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _is_uuid(value: str) -> bool:
    try:
        uuid.UUID(value)
        return True
    except ValueError:
        return False


class AdminService:
    """Read models for the admin dashboard."""

    def __init__(self, db: Client):
        self.db = db

    def _count(self, table: str) -> int:
        result = self.db.table(table).select("id", count="exact").limit(1).execute()
        return result.count or 0

    def get_stats(self) -> AdminStats:
        videos = self._count("videos")
        pending = EmbeddingService(self.db).count_pending()
        return AdminStats(
            users=self._count("profiles"),
            videos=videos,
            pending_embeddings=pending,
            indexed_videos=max(videos - pending, 0),
        )

    def get_recent_logs(self, limit: int = 10) -> list[ActivityLogEntry]:
        """Latest telemetry, newest first."""
        result = (
            self.db.table("activity_logs")
            .select("*")
            .order("created_at", desc=True)
            .limit(limit)
            .execute()
        )
        return [
            ActivityLogEntry(
                **{k: v for k, v in row.items() if v is not None},
                is_failure=is_failure_event(row.get("event_type")),
            )
            for row in (result.data or [])
        ]

    def lookup_user(self, query: str) -> list[ProfileResponse]:
        """Find athletes by exact user id or by (partial) email."""
        query = query.strip()
        if not query:
            return []

        db_query = self.db.table("profiles").select("id, email, role, is_paid")
        if _is_uuid(query):
            db_query = db_query.eq("id", query)
        else:
            db_query = db_query.ilike("email", f"%{_escape_like(query)}%")

        result = db_query.limit(20).execute()
        return [
            ProfileResponse(**{k: v for k, v in row.items() if v is not None})
            for row in (result.data or [])
        ]
