"""Application email – MailNotifier."""
from __future__ import annotations

from alertcron.application.email.message import EmailMessage, MailAlert
from alertcron.application.email.sender import EmailSender
from alertcron.application.email.smtp import SmtpConfig, SmtpEmailSender

__all__ = ["MailNotifier"]


class MailNotifier:
    """Best-effort, one-shot e-mail dispatch of a job failure.

    A missing notifier (``None`` where one is accepted) is the unconfigured
    state; callers skip it without recording anything.
    """

    def __init__(self, alert: MailAlert, sender: EmailSender | None = None) -> None:
        self.alert = alert
        self._sender = sender or SmtpEmailSender(SmtpConfig.from_alert(alert))
        self._last: EmailMessage | None = None

    @property
    def last_message(self) -> str:
        """Transcript of the last rendered message, or ``""``."""
        return self._last.render() if self._last else ""

    def compose(self, error: BaseException) -> EmailMessage:
        message = EmailMessage(
            to=list(self.alert.to),
            subject=self.alert.subject,
            sender=self.alert.sender,
            body=str(error),
        )
        self._last = message
        return message

    async def deliver(self, message: EmailMessage) -> str:
        return await self._sender.send(message)

    async def send(self, error: BaseException) -> str:
        return await self.deliver(self.compose(error))
