import logging
from datetime import datetime
from typing import Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from jobdaemon.config.settings import settings
from jobdaemon.core.orchestrator import Orchestrator

logger = logging.getLogger(__name__)

JOB_ID = "job_scrape"


def setup_scheduler(
    orchestrator: Orchestrator,
    interval_minutes: int = settings.SCHEDULE_INTERVAL_MINUTES,
    start: bool = True,
) -> AsyncIOScheduler:
    """
    Run the orchestrator immediately, then every ``interval_minutes``.

    Overlap protection is the orchestrator's single-flight guard. The job
    allows a second concurrent instance: a tick during an overrunning run
    reaches the guard and is logged as a no-op.
    """
    scheduler = AsyncIOScheduler(
        job_defaults={
            "coalesce": True,
            "max_instances": 2,
            "misfire_grace_time": 60,
        }
    )
    scheduler.add_job(
        orchestrator.tick,
        trigger=IntervalTrigger(minutes=interval_minutes),
        id=JOB_ID,
        name=f"Job scrape (every {interval_minutes} min)",
        next_run_time=datetime.now(scheduler.timezone),
        replace_existing=True,
    )

    if start:
        scheduler.start()
        logger.info(
            f"Scheduler started. Running immediately and every {interval_minutes} minutes."
        )
    return scheduler


def shutdown_scheduler(scheduler: Optional[AsyncIOScheduler]) -> None:
    if scheduler and scheduler.running:
        scheduler.shutdown(wait=False)
        logger.info("Scheduler shutdown complete")
