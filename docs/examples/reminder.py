"""Daily reminder – a job that always "fails" so the popup shows up.

The lifetime is shorter than the interval, so the job runs once, the loop
sleeps while the notification is on screen, then exits before a second run.

Run with::

    pip install -e .
    python docs/examples/reminder.py

Everything below can also come from the environment, e.g.::

    ALERTCRON_BROWSER_HOST=localhost:8082 ALERTCRON_INTERVAL_SECONDS=60 \\
    ALERTCRON_LIFETIME_SECONDS=30 python docs/examples/reminder.py --env
"""
from __future__ import annotations

import logging
import sys

from alertcron.application.notifications import BrowserNotification
from alertcron.application.scheduler import Cron, Schedule
from alertcron.config import CronSettings, SettingsFactory
from alertcron.observability.logging import JsonLoggerFactory


def job() -> None:
    raise RuntimeError("syncblobs -interval=0 -askauth=true -debug=true")


def main() -> None:
    JsonLoggerFactory.configure(level=logging.INFO)
    if "--env" in sys.argv[1:]:
        cron = Cron.from_settings(job, SettingsFactory.create(CronSettings))
    else:
        cron = Cron(
            job,
            Schedule(interval_seconds=60, lifetime_seconds=30),
            browser=BrowserNotification(
                host="localhost:8082",
                message="Syncblobs reminder",
                timeout_seconds=5 * 60,
            ),
        )
    cron.run()
    print(f"alerts written to {cron.sink.resolve()}")


if __name__ == "__main__":
    main()
