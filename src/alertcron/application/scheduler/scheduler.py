"""Application scheduler – Cron, the tick loop.

One tick runs the job once and, on failure, hands the error to the
:class:`AlertCoordinator`. Between ticks the loop sleeps for the interval and
then checks the lifetime, so a lifetime shorter than the interval still
yields exactly one run.
"""
from __future__ import annotations

import asyncio
import inspect
import threading
from typing import TYPE_CHECKING, Any, Awaitable, Callable

from alertcron.application.alerts import (
    DEFAULT_MAIL_TIMEOUT_SECONDS,
    AlertCoordinator,
    AlertSink,
    FileAlertSink,
    SinkFailurePolicy,
    escalate,
)
from alertcron.application.email import MailAlert, MailNotifier
from alertcron.application.notifications import BrowserNotification, BrowserNotifier
from alertcron.application.scheduler.job import Job, Schedule
from alertcron.kernel.errors import BrowserNotifierError, BrowserNotifierFailure, JobTimeout, SinkWriteError
from alertcron.kernel.time import Clock, SystemClock
from alertcron.observability.logging import get_logger
from alertcron.resilience.timeouts import TimeoutRace

if TYPE_CHECKING:
    from alertcron.config.cron import CronSettings

__all__ = ["Cron"]

Sleep = Callable[[float], Awaitable[Any]]

_log = get_logger(__name__)


class Cron:
    """Run *job* on *schedule* and alert on every failure.

    Parameters
    ----------
    job:
        Zero-argument callable, plain or ``async``.
    schedule:
        Interval and optional lifetime.
    sink:
        Durable record of failures; a temp-file :class:`FileAlertSink` if omitted.
    mail, browser:
        Optional channels, either as configuration or as ready notifiers.
    mail_timeout_seconds:
        Budget for one mail send before a timeout record is written.
    job_timeout_seconds:
        Optional budget for one job run. A run that exceeds it is recorded as
        a :class:`JobTimeout` and keeps running; ticks are skipped until it
        finishes.
    sink_failure_policy:
        What to do when the sink cannot be written.
    clock, sleep:
        Injection points for tests.
    """

    def __init__(
        self,
        job: Job,
        schedule: Schedule | None = None,
        *,
        sink: AlertSink | None = None,
        mail: MailAlert | MailNotifier | None = None,
        browser: BrowserNotification | BrowserNotifier | None = None,
        mail_timeout_seconds: float = DEFAULT_MAIL_TIMEOUT_SECONDS,
        job_timeout_seconds: float | None = None,
        sink_failure_policy: SinkFailurePolicy = SinkFailurePolicy.TERMINATE,
        clock: Clock | None = None,
        sleep: Sleep | None = None,
    ) -> None:
        self.job = job
        self.schedule = schedule or Schedule()
        self.sink = sink or FileAlertSink(clock=clock)
        if isinstance(mail, MailAlert):
            mail = MailNotifier(mail)
        if isinstance(browser, BrowserNotification):
            browser = BrowserNotifier(browser)
        self.browser = browser
        self.coordinator = AlertCoordinator(
            self.sink,
            browser=browser,
            mail=mail,
            mail_timeout_seconds=mail_timeout_seconds,
            sink_failure_policy=sink_failure_policy,
        )
        self._job_race: TimeoutRace[Any] | None = (
            TimeoutRace(job_timeout_seconds, name="job") if job_timeout_seconds else None
        )
        self._clock = clock or SystemClock()
        self._sleep = sleep or asyncio.sleep
        self.runs = 0
        self.skipped = 0

    @classmethod
    def from_settings(cls, job: Job, settings: "CronSettings", **overrides: Any) -> "Cron":
        kwargs: dict[str, Any] = {
            "schedule": settings.schedule(),
            "sink": FileAlertSink(settings.sink_path) if settings.sink_path else None,
            "mail": settings.mail_alert(),
            "browser": settings.browser_notification(),
            "mail_timeout_seconds": settings.mail_timeout_seconds,
            "job_timeout_seconds": settings.job_timeout_seconds,
            "sink_failure_policy": settings.policy(),
        }
        kwargs.update(overrides)
        return cls(job, **kwargs)

    def run(self) -> None:
        """Block until the schedule says stop.

        Returns as soon as the loop ends. Sends and job runs that lost their
        race and are still in flight are cancelled with the event loop; a
        sync job stuck on its daemon thread is abandoned, never joined.
        """
        asyncio.run(self.run_async())

    async def run_async(self) -> None:
        self._prepare()
        started_at = self._clock.now()
        _log.info(
            "cron.started",
            interval_seconds=self.schedule.interval_seconds,
            lifetime_seconds=self.schedule.lifetime_seconds,
        )
        while True:
            await self.tick()
            if self.schedule.run_once:
                break
            await self._sleep(self.schedule.interval_seconds)
            if self.schedule.expired(started_at, self._clock.now()):
                break
        _log.info("cron.stopped", runs=self.runs, skipped=self.skipped)

    def _prepare(self) -> None:
        try:
            path = self.sink.resolve()
        except SinkWriteError as exc:
            escalate(self.coordinator.sink_failure_policy, exc, "could not create alert sink")
        else:
            _log.info("cron.sink_ready", path=str(path) if path else None)

        if self.browser is not None:
            try:
                self.browser.start()
            except BrowserNotifierError as exc:
                _log.error("cron.browser_start_failed", error=str(exc))
                self.coordinator.record(BrowserNotifierFailure(exc))

    async def tick(self) -> None:
        """Run the job once and alert if it failed."""
        if self._job_race is not None and self._job_race.pending:
            self.skipped += 1
            _log.warning("cron.tick_skipped", reason="previous run still running")
            return

        self.runs += 1
        error = await self._invoke()
        if error is not None:
            await self.coordinator.notify(error)

    async def _invoke(self) -> BaseException | None:
        if self._job_race is None:
            try:
                return await self._call_inline()
            except Exception as exc:  # noqa: BLE001
                return exc

        outcome = await self._job_race.run(self._call_detached)
        if outcome.timed_out:
            return JobTimeout(self._job_race.timeout_seconds)
        if outcome.error is not None:
            return outcome.error
        return self._as_error(outcome.value)

    async def _call_inline(self) -> BaseException | None:
        result = self.job()
        if inspect.isawaitable(result):
            result = await result
        return self._as_error(result)

    async def _call_detached(self) -> Any:
        if inspect.iscoroutinefunction(self.job):
            return await self.job()
        result = await _in_daemon_thread(self.job)
        if inspect.isawaitable(result):
            result = await result
        return result

    @staticmethod
    def _as_error(result: Any) -> BaseException | None:
        return result if isinstance(result, BaseException) else None


def _in_daemon_thread(fn: Callable[[], Any]) -> asyncio.Future[Any]:
    """Run *fn* on its own daemon thread and return a future for its outcome.

    Unlike ``asyncio.to_thread`` the thread is not owned by the loop's
    executor, so a job that never returns does not hold up loop shutdown or
    process exit.
    """
    loop = asyncio.get_running_loop()
    future: asyncio.Future[Any] = loop.create_future()

    def settle(value: Any, error: BaseException | None) -> None:
        if future.done():
            return
        if error is not None:
            future.set_exception(error)
        else:
            future.set_result(value)

    def target() -> None:
        try:
            value, error = fn(), None
        except BaseException as exc:  # noqa: BLE001 – handed to the loop
            value, error = None, exc
        try:
            loop.call_soon_threadsafe(settle, value, error)
        except RuntimeError:
            # loop already closed; nobody is waiting any more
            _log.debug("cron.job_outlived_loop", error=repr(error) if error else None)

    threading.Thread(target=target, name="alertcron-job", daemon=True).start()
    return future
