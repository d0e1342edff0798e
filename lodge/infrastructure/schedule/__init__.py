from .runner import CronJob, ScheduleRunner, housekeeping_jobs

__all__ = ["CronJob", "ScheduleRunner", "housekeeping_jobs"]
