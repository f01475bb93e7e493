"""
Scheduled Sweep Module

Uses APScheduler to run the expired-key sweep periodically for hosts that
want one. The cache itself never schedules anything.
"""

import logging
from typing import Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from kvcache.config import Settings, get_settings
from kvcache.services.cache_service import KeyValueCache

logger = logging.getLogger(__name__)

# Global Scheduler Instance
_scheduler: Optional[AsyncIOScheduler] = None


async def sweep_expired_task(cache: KeyValueCache):
    """
    Scheduled Sweep Task

    Deletes expired key-value documents. Failures are logged and the next
    run proceeds as scheduled.
    """
    logger.info("Starting scheduled KV cache sweep")

    try:
        await cache.delete_expired()
    except Exception as e:
        logger.error(f"KV cache sweep failed: {str(e)}", exc_info=True)


def start_scheduler(cache: KeyValueCache, settings: Optional[Settings] = None):
    """
    Start Sweep Scheduler

    Does nothing unless CACHE_SWEEP_ENABLED is set. Must be called from
    within a running event loop.

    Args:
        cache: Cache whose expired records are swept
        settings: Cache configuration, defaults to get_settings()
    """
    global _scheduler

    if _scheduler is not None:
        logger.warning("Scheduler already started")
        return

    settings = settings or get_settings()
    if not settings.CACHE_SWEEP_ENABLED:
        logger.info("KV cache sweep disabled, scheduler not started")
        return

    interval_seconds = settings.CACHE_SWEEP_INTERVAL_SECONDS
    _scheduler = AsyncIOScheduler()

    _scheduler.add_job(
        sweep_expired_task,
        trigger=IntervalTrigger(seconds=interval_seconds),
        args=[cache],
        id="sweep_expired_kv",
        name="Sweep expired KV pairs",
        replace_existing=True,
    )

    _scheduler.start()
    logger.info(f"Scheduler started: KV cache sweep every {interval_seconds} seconds")


def shutdown_scheduler():
    """
    Shutdown Sweep Scheduler

    Gracefully stops the sweep job.
    """
    global _scheduler

    if _scheduler is None:
        return

    _scheduler.shutdown(wait=True)
    _scheduler = None
    logger.info("Scheduler shutdown completed")


def get_scheduler() -> Optional[AsyncIOScheduler]:
    """
    Get Scheduler Instance

    Returns:
        Optional[AsyncIOScheduler]: Scheduler instance or None
    """
    return _scheduler
