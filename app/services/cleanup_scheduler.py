"""
Cleanup Scheduler Service

Manages scheduled pruning of usage log entries past the retention window.
Uses APScheduler for periodic job execution.
"""

import logging

from apscheduler.schedulers.asyncio import AsyncIOScheduler

from app.config import settings
from .provider_factory import get_usage_recorder

logger = logging.getLogger(__name__)

scheduler = AsyncIOScheduler()

JOB_ID = "prune_usage_logs"


async def prune_usage_logs() -> dict:
    """
    Delete usage log entries older than USAGE_LOG_RETENTION_DAYS.

    Returns:
        dict: Summary of the cleanup run
    """
    summary = {"entries_deleted": 0, "errors": 0}

    try:
        summary["entries_deleted"] = get_usage_recorder().prune_older_than(
            settings.USAGE_LOG_RETENTION_DAYS
        )
    except (OSError, ValueError) as e:
        summary["errors"] += 1
        logger.error(f"Failed to prune usage logs: {e}")

    logger.info(
        f"Cleanup completed: {summary['entries_deleted']} usage entries deleted, "
        f"{summary['errors']} errors"
    )
    return summary


def start_cleanup_scheduler():
    """
    Start the cleanup scheduler.

    Safe to call multiple times - will not add duplicate jobs.
    """
    if scheduler.running:
        logger.debug("Scheduler already running")
        return

    if not scheduler.get_job(JOB_ID):
        scheduler.add_job(
            prune_usage_logs,
            "interval",
            hours=settings.USAGE_CLEANUP_INTERVAL_HOURS,
            id=JOB_ID,
            name="Prune old usage logs",
            replace_existing=True,
        )
        logger.info(
            f"Scheduled usage log pruning: every {settings.USAGE_CLEANUP_INTERVAL_HOURS} hour(s), "
            f"retention: {settings.USAGE_LOG_RETENTION_DAYS} days"
        )

    scheduler.start()
    logger.info("Cleanup scheduler started")


def stop_cleanup_scheduler():
    """Stop the cleanup scheduler gracefully."""
    if scheduler.running:
        scheduler.shutdown(wait=False)
        logger.info("Cleanup scheduler stopped")


def get_scheduler_status() -> dict:
    """
    Get current scheduler status for health checks.
    """
    job = scheduler.get_job(JOB_ID)
    return {
        "running": scheduler.running,
        "job_scheduled": job is not None,
        "next_run": str(job.next_run_time) if job else None,
        "interval_hours": settings.USAGE_CLEANUP_INTERVAL_HOURS,
        "retention_days": settings.USAGE_LOG_RETENTION_DAYS,
    }
