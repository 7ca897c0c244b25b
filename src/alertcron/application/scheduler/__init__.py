"""Application scheduler – job type, schedule and the Cron loop."""
from alertcron.application.scheduler.job import Job, Schedule
from alertcron.application.scheduler.scheduler import Cron

__all__ = ["Cron", "Job", "Schedule"]
