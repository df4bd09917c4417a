"""
Background scheduler for the periodic indexing sweep.

Uses APScheduler so newly published videos become visible to the
recommendation engine without an admin clicking "Bulk Index".
"""

import logging

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from academy.config import get_settings
from academy.background.embedding_tasks import run_bulk_indexing

logger = logging.getLogger(__name__)

EMBEDDING_SWEEP_JOB_ID = "embedding_sweep_job"

# Singleton scheduler instance
scheduler = AsyncIOScheduler()


def configure_embedding_sweep(sched: AsyncIOScheduler = scheduler) -> bool:
    """Register (or remove) the sweep job from EMBEDDING_SWEEP_INTERVAL_MINUTES.

    Returns:
        True if the job is scheduled.
    """
    minutes = get_settings().EMBEDDING_SWEEP_INTERVAL_MINUTES

    if minutes <= 0:
        if sched.get_job(EMBEDDING_SWEEP_JOB_ID):
            sched.remove_job(EMBEDDING_SWEEP_JOB_ID)
        logger.info("Embedding sweep disabled.")
        return False

    sched.add_job(
        run_bulk_indexing,
        IntervalTrigger(minutes=minutes),
        id=EMBEDDING_SWEEP_JOB_ID,
        replace_existing=True,
        max_instances=1,
        coalesce=True,
    )
    logger.info(f"⏰ Embedding sweep scheduled every {minutes} min")
    return True


def start_scheduler() -> None:
    """Start the scheduler if there is anything to run."""
    if configure_embedding_sweep() and not scheduler.running:
        scheduler.start()


def shutdown_scheduler() -> None:
    if scheduler.running:
        scheduler.shutdown(wait=False)
