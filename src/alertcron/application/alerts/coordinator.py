"""Application alerts – AlertCoordinator.

Fans a job failure out to the notification channels and makes sure every
outcome lands in the sink. For one failure event the sink receives, in
this order:

1. a browser failure record, if the browser notifier is configured and fails;
2. the job failure record (always);
3. a mail failure *or* a mail timeout record, if mail is configured and did
   not succeed within its budget.
"""
from __future__ import annotations

from alertcron.application.alerts.policy import SinkFailurePolicy, escalate
from alertcron.application.alerts.sink import AlertSink
from alertcron.application.email import MailNotifier
from alertcron.application.notifications import BrowserNotifier
from alertcron.kernel.errors import (
    AlertError,
    BrowserNotifierFailure,
    JobFailure,
    MailNotifierFailure,
    NotifierTimeout,
    SinkWriteError,
)
from alertcron.observability.logging import get_logger
from alertcron.resilience.timeouts import TimeoutRace

__all__ = ["DEFAULT_MAIL_TIMEOUT_SECONDS", "AlertCoordinator"]

DEFAULT_MAIL_TIMEOUT_SECONDS = 10.0

_log = get_logger(__name__)


class AlertCoordinator:
    """Notify on a job failure without ever failing outward.

    The only exception that escapes :meth:`notify` is the one the
    ``sink_failure_policy`` asks for (``SystemExit`` under ``TERMINATE``).
    """

    def __init__(
        self,
        sink: AlertSink,
        *,
        browser: BrowserNotifier | None = None,
        mail: MailNotifier | None = None,
        mail_timeout_seconds: float = DEFAULT_MAIL_TIMEOUT_SECONDS,
        sink_failure_policy: SinkFailurePolicy = SinkFailurePolicy.TERMINATE,
    ) -> None:
        self.sink = sink
        self.browser = browser
        self.mail = mail
        self.sink_failure_policy = SinkFailurePolicy(sink_failure_policy)
        self._mail_race: TimeoutRace[str] = TimeoutRace(mail_timeout_seconds, name="mail")

    @property
    def mail_timeout_seconds(self) -> float:
        return self._mail_race.timeout_seconds

    @property
    def pending_mail(self) -> int:
        """Mail sends that timed out and are still running."""
        return self._mail_race.pending

    async def notify(self, failure: BaseException) -> None:
        job_failure = JobFailure.from_exception(failure)
        _log.warning("alerts.job_failed", **job_failure.to_dict())

        if self.browser is not None:
            await self._notify_browser(self.browser, job_failure)

        self.record(job_failure)

        if self.mail is not None:
            await self._notify_mail(self.mail, job_failure)

    async def _notify_browser(self, browser: BrowserNotifier, job_failure: JobFailure) -> None:
        try:
            await browser.send(job_failure)
        except Exception as exc:  # noqa: BLE001
            _log.error("alerts.browser_failed", error=str(exc))
            self.record(BrowserNotifierFailure(exc))

    async def _notify_mail(self, mail: MailNotifier, job_failure: JobFailure) -> None:
        message = mail.compose(job_failure)
        rendered = message.render()
        outcome = await self._mail_race.run(lambda: mail.deliver(message))
        if outcome.timed_out:
            _log.error("alerts.mail_timed_out", timeout_seconds=self.mail_timeout_seconds)
            self.record(NotifierTimeout(rendered, self.mail_timeout_seconds))
        elif outcome.error is not None:
            _log.error("alerts.mail_failed", error=str(outcome.error))
            self.record(MailNotifierFailure(rendered, outcome.error))
        else:
            _log.info("alerts.mail_sent", elapsed_ms=round(outcome.elapsed_ms, 2))

    def record(self, error: AlertError) -> None:
        """Append *error* to the sink, escalating a failed write."""
        record = str(error)
        try:
            self.sink.append(record)
        except SinkWriteError as exc:
            escalate(self.sink_failure_policy, exc, record)
