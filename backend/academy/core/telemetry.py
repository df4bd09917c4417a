"""
Activity telemetry: rows in `activity_logs` that the admin dashboard reads.
"""

import logging
from supabase import Client

logger = logging.getLogger(__name__)

# ── Event types ──────────────────────────────────────────
AI_EMBEDDING_START = "AI_EMBEDDING_START"
AI_EMBEDDING_SUCCESS = "AI_EMBEDDING_SUCCESS"
AI_EMBEDDING_FAILURE = "AI_EMBEDDING_FAILURE"
AI_RECOMMENDATION_GENERATED = "AI_RECOMMENDATION_GENERATED"
STUDY_ASSET_DOWNLOAD = "STUDY_ASSET_DOWNLOAD"

# ── Contexts ─────────────────────────────────────────────
GEMINI_PIPELINE = "gemini_pipeline"
ADVENTURE_ENGINE = "adventure_engine"
TRANSCRIPT_READER = "transcript_reader"


def log_activity(
    db: Client,
    event_type: str,
    context: str,
    metadata: dict,
    user_id: str | None = None,
) -> None:
    """Insert one telemetry row.

    Best effort: a failed insert is logged and never aborts the caller.
    """
    row = {
        "event_type": event_type,
        "context": context,
        "metadata": metadata,
    }
    if user_id:
        row["user_id"] = user_id

    try:
        db.table("activity_logs").insert(row).execute()
    except Exception as e:
        logger.warning(f"Telemetry insert failed for {event_type}: {e}")


def is_failure_event(event_type: str | None) -> bool:
    """Error/failure events are highlighted on the admin dashboard."""
    if not event_type:
        return False
    return "ERROR" in event_type or "FAILURE" in event_type
