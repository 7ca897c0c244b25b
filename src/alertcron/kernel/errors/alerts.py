"""Alert errors – what ends up in the sink, one class per record kind."""

from __future__ import annotations

from typing import Any

from alertcron.kernel.errors.base import BaseError


class AlertError(BaseError):
    """A failure signal that must be recorded durably."""

    default_code = "alert_error"


class JobFailure(AlertError):
    """The job raised (or returned) an error."""

    default_code = "job_failure"

    @classmethod
    def from_exception(cls, exc: BaseException) -> "JobFailure":
        if isinstance(exc, JobFailure):
            return exc
        return cls(str(exc) or type(exc).__name__, cause=exc)


class JobTimeout(JobFailure):
    """The job did not finish within its time budget."""

    default_code = "job_timeout"

    def __init__(self, timeout_seconds: float, **kwargs: Any) -> None:
        super().__init__(f"job did not finish within {timeout_seconds:g}s", **kwargs)
        self.timeout_seconds = timeout_seconds


class NotifierFailure(AlertError):
    """A configured notification channel could not be invoked.

    ``channel`` identifies the notifier (``"mail"`` or ``"browser"``).
    """

    default_code = "notifier_failure"
    channel: str = ""

    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.detail.setdefault("channel", self.channel)


class MailNotifierFailure(NotifierFailure):
    """Mail dispatch finished within budget but failed."""

    default_code = "mail_notifier_failure"
    channel = "mail"

    def __init__(self, rendered: str, cause: BaseException, **kwargs: Any) -> None:
        super().__init__(f"could not send mail alert {rendered!r}: {cause}", cause=cause, **kwargs)
        self.rendered = rendered


class BrowserNotifierFailure(NotifierFailure):
    """The browser notification could not be opened."""

    default_code = "browser_notifier_failure"
    channel = "browser"

    def __init__(self, cause: BaseException, **kwargs: Any) -> None:
        super().__init__(f"could not open notification: {cause}", cause=cause, **kwargs)


class NotifierTimeout(AlertError):
    """Mail dispatch did not answer within its budget."""

    default_code = "notifier_timeout"

    def __init__(self, rendered: str, timeout_seconds: float, **kwargs: Any) -> None:
        super().__init__(
            f"timed out sending mail alert {rendered!r} after {timeout_seconds:g}s",
            **kwargs,
        )
        self.detail.setdefault("channel", "mail")
        self.rendered = rendered
        self.timeout_seconds = timeout_seconds


class SinkWriteError(AlertError):
    """The durable sink itself could not be written.

    There is no further fallback, so callers escalate this according to the
    configured :class:`~alertcron.application.alerts.SinkFailurePolicy`.
    """

    default_code = "sink_write_error"
    unrecoverable = True

    def __init__(self, path: str, cause: BaseException | None = None, **kwargs: Any) -> None:
        super().__init__(f"could not open or create file {path}: {cause}", cause=cause, **kwargs)
        self.path = path


__all__ = [
    "AlertError",
    "BrowserNotifierFailure",
    "JobFailure",
    "JobTimeout",
    "MailNotifierFailure",
    "NotifierFailure",
    "NotifierTimeout",
    "SinkWriteError",
]
