"""Daily roll-forward job registration."""

from apscheduler.triggers.cron import CronTrigger

from ghostbill import conf
from ghostbill.infrastructure.scheduler.scheduler_service import (
    RECURRING_SWEEP_JOB_ID,
    build_scheduler,
    remove_job_if_exists,
    schedule_recurring_sweep,
)


def test_schedule_recurring_sweep_registers_single_daily_job(recurring_service):
    sched = build_scheduler()

    schedule_recurring_sweep(sched, recurring_service)
    schedule_recurring_sweep(sched, recurring_service)

    jobs = sched.get_jobs()
    assert [job.id for job in jobs] == [RECURRING_SWEEP_JOB_ID]
    assert jobs[0].func == recurring_service.roll_forward_due
    assert isinstance(jobs[0].trigger, CronTrigger)
    assert f"hour='{conf.RECURRING_SWEEP_HOUR}'" in str(jobs[0].trigger)


def test_remove_job_if_exists_ignores_unknown_ids():
    remove_job_if_exists(build_scheduler(), "missing")
