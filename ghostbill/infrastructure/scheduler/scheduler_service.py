from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.executors.pool import ThreadPoolExecutor
from apscheduler.jobstores.base import JobLookupError
from apscheduler.triggers.cron import CronTrigger
from dateutil.tz import gettz
from ghostbill import conf
from ghostbill.core.log.logging_service import get_logger

logger = get_logger(__name__)

RECURRING_SWEEP_JOB_ID = "recurring-roll-forward"

def build_scheduler() -> AsyncIOScheduler:
    executors = {
        "default": ThreadPoolExecutor(max_workers=2),
    }
    job_defaults = {"coalesce": True, "max_instances": 1}

    # Same calendar as the recurrence scheduler, so "midnight" is a UTC day boundary
    tz = gettz(conf.CALENDAR_TZ)
    sched = AsyncIOScheduler(
        executors=executors,
        job_defaults=job_defaults,
        timezone=tz,
    )
    return sched

def schedule_recurring_sweep(scheduler, service) -> None:
    """Run the recurring roll-forward once a day at RECURRING_SWEEP_HOUR:00."""
    remove_job_if_exists(scheduler, RECURRING_SWEEP_JOB_ID)
    scheduler.add_job(
        func=service.roll_forward_due,
        trigger=CronTrigger(hour=conf.RECURRING_SWEEP_HOUR, minute=0, timezone=gettz(conf.CALENDAR_TZ)),
        id=RECURRING_SWEEP_JOB_ID,
        replace_existing=True,
        misfire_grace_time=conf.MISFIRE_GRACE_TIME,
    )
    logger.info(f"Scheduled recurring roll-forward daily at {conf.RECURRING_SWEEP_HOUR:02d}:00 {conf.CALENDAR_TZ}")

def remove_job_if_exists(scheduler, job_id: str):
    try:
        scheduler.remove_job(job_id)
    except JobLookupError:
        pass
