# eventops/scheduler.py
"""
Background task scheduler for periodic housekeeping.

Uses APScheduler to run periodic background jobs for:
- Cleaning up stale failed-login records
- Expiring organization invitations
"""

import logging
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger
from apscheduler.events import EVENT_JOB_ERROR, EVENT_JOB_MISSED

from eventops.background_tasks.maintenance_tasks import (
    cleanup_lockout_records,
    expire_organization_invitations,
)

logger = logging.getLogger(__name__)

# Global scheduler instance
scheduler = None


def _on_job_error(event):
    """Log scheduler job errors with full context."""
    exc = event.exception
    logger.error(
        "Scheduled job FAILED: job_id=%s error=%s",
        event.job_id, exc,
        exc_info=(type(exc), exc, None) if exc else None,
    )
    if event.traceback:
        logger.error("Traceback for job %s:\n%s", event.job_id, event.traceback)


def _on_job_missed(event):
    """Log when a scheduled job misses its execution window."""
    logger.warning(
        "Scheduled job MISSED: job_id=%s scheduled_run_time=%s",
        event.job_id,
        event.scheduled_run_time,
    )


def init_scheduler(start: bool = True):
    """
    Initialize the background scheduler with all periodic tasks.

    This is called once when the application starts up.
    """
    global scheduler

    if scheduler is not None:
        logger.warning("Scheduler already initialized")
        return scheduler

    scheduler = BackgroundScheduler(
        timezone="UTC",
        job_defaults={
            'coalesce': True,
            'max_instances': 1,
            'misfire_grace_time': 60,
        }
    )

    scheduler.add_job(
        func=cleanup_lockout_records,
        trigger=IntervalTrigger(hours=1),
        id='cleanup_lockout_records',
        name='Cleanup Stale Failed-Login Records',
        replace_existing=True
    )
    logger.info("Scheduled job: cleanup_lockout_records (every 1 hour)")

    scheduler.add_job(
        func=expire_organization_invitations,
        trigger=IntervalTrigger(hours=1),
        id='expire_organization_invitations',
        name='Expire Organization Invitations',
        replace_existing=True
    )
    logger.info("Scheduled job: expire_organization_invitations (every 1 hour)")

    scheduler.add_listener(_on_job_error, EVENT_JOB_ERROR)
    scheduler.add_listener(_on_job_missed, EVENT_JOB_MISSED)

    if start:
        scheduler.start()
        logger.info("Background scheduler started successfully")

    return scheduler


def shutdown_scheduler():
    """
    Gracefully shutdown the scheduler.

    This is called when the application shuts down.
    """
    global scheduler

    if scheduler is not None:
        if scheduler.running:
            scheduler.shutdown(wait=True)
        logger.info("Background scheduler shutdown complete")
        scheduler = None


def get_scheduler_status():
    """Get the current status of all scheduled jobs."""
    if scheduler is None:
        return {"status": "not_initialized", "jobs": []}

    jobs = []
    for job in scheduler.get_jobs():
        next_run_time = getattr(job, "next_run_time", None)
        jobs.append({
            "id": job.id,
            "name": job.name,
            "next_run_time": next_run_time.isoformat() if next_run_time else None,
            "trigger": str(job.trigger)
        })

    return {
        "status": "running" if scheduler.running else "stopped",
        "jobs": jobs
    }
