"""
Background tasks for transcript indexing.
Used by the admin dashboard (FastAPI BackgroundTasks) and the scheduler sweep.
"""

import logging
from academy.core.database import get_supabase_admin_client
from academy.features.embeddings.service import EmbeddingService

logger = logging.getLogger(__name__)


def run_bulk_indexing() -> None:
    """Index every published video that still has no embedding."""
    try:
        service = EmbeddingService(get_supabase_admin_client())
        result = service.bulk_process_embeddings()
    except Exception as e:
        logger.error(f"❌ Background Task: bulk indexing crashed: {e}")
        return

    if result.success:
        logger.info(f"✅ Background Task: {result.message}")
    else:
        logger.warning(f"⚠️ Background Task: {result.message} failed_ids={result.failed_ids}")
