"""Config – CronSettings, the environment surface of a Cron host."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar

from alertcron.application.alerts import DEFAULT_MAIL_TIMEOUT_SECONDS, SinkFailurePolicy
from alertcron.application.email import MailAlert
from alertcron.application.notifications import BrowserNotification
from alertcron.application.scheduler import Schedule
from alertcron.config.settings.base import Settings
from alertcron.config.validation import InvalidSettingValueError

__all__ = ["CronSettings"]


@dataclass
class CronSettings(Settings):
    """Everything a Cron needs apart from the job.

    Mail is enabled by setting ``mail_smtp``; the browser popup by setting
    ``browser_host``. Both are off by default.
    """

    _prefix: ClassVar[str] = "ALERTCRON"

    interval_seconds: float = 0.0
    lifetime_seconds: float | None = None
    job_timeout_seconds: float | None = None

    sink_path: str | None = None
    sink_failure_policy: str = SinkFailurePolicy.TERMINATE.value

    mail_timeout_seconds: float = DEFAULT_MAIL_TIMEOUT_SECONDS
    mail_subject: str = "alertcron: job failed"
    mail_to: list[str] = field(default_factory=list)
    mail_from: str | None = None
    mail_smtp: str | None = None
    mail_username: str | None = None
    mail_password: str | None = field(default=None, repr=False)
    mail_start_tls: bool = False

    browser_host: str | None = None
    browser_message: str = "alertcron notification"
    browser_timeout_seconds: float | None = None

    def _validate(self) -> None:
        for name in ("interval_seconds", "lifetime_seconds", "job_timeout_seconds", "browser_timeout_seconds"):
            value = getattr(self, name)
            if value is not None and value < 0:
                raise InvalidSettingValueError(name, value, "must be >= 0")
        if self.mail_timeout_seconds <= 0:
            raise InvalidSettingValueError("mail_timeout_seconds", self.mail_timeout_seconds, "must be > 0")
        if self.sink_failure_policy not in {p.value for p in SinkFailurePolicy}:
            raise InvalidSettingValueError(
                "sink_failure_policy",
                self.sink_failure_policy,
                "expected one of " + ", ".join(p.value for p in SinkFailurePolicy),
            )
        if self.mail_smtp:
            if not self.mail_to:
                raise InvalidSettingValueError("mail_to", self.mail_to, "required when mail_smtp is set")
            if not self.mail_from:
                raise InvalidSettingValueError("mail_from", self.mail_from, "required when mail_smtp is set")

    def schedule(self) -> Schedule:
        return Schedule(self.interval_seconds, self.lifetime_seconds)

    def policy(self) -> SinkFailurePolicy:
        return SinkFailurePolicy(self.sink_failure_policy)

    def mail_alert(self) -> MailAlert | None:
        if not self.mail_smtp:
            return None
        return MailAlert(
            subject=self.mail_subject,
            to=list(self.mail_to),
            sender=self.mail_from or "",
            smtp=self.mail_smtp,
            username=self.mail_username,
            password=self.mail_password,
            start_tls=self.mail_start_tls,
        )

    def browser_notification(self) -> BrowserNotification | None:
        if not self.browser_host:
            return None
        return BrowserNotification(
            host=self.browser_host,
            message=self.browser_message,
            timeout_seconds=self.browser_timeout_seconds,
        )
