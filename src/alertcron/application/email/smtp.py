"""Application email – SmtpEmailSender backed by ``aiosmtplib``."""
from __future__ import annotations

import email.message
import email.utils
import logging
from dataclasses import dataclass, field

import aiosmtplib

from alertcron.application.email.message import EmailMessage, MailAlert

__all__ = ["SmtpConfig", "SmtpEmailSender"]

logger = logging.getLogger(__name__)


@dataclass
class SmtpConfig:
    hostname: str
    port: int = 25
    username: str | None = None
    password: str | None = field(default=None, repr=False)
    use_tls: bool = False
    start_tls: bool = False
    timeout: float = 30.0

    @classmethod
    def from_alert(cls, alert: MailAlert) -> "SmtpConfig":
        return cls(
            hostname=alert.hostname,
            port=alert.port,
            username=alert.username,
            password=alert.password,
            start_tls=alert.start_tls,
            timeout=alert.timeout,
        )


class SmtpEmailSender:
    """EmailSender that opens a fresh SMTP session per message.

    Connect, MAIL FROM, RCPT TO for every recipient, DATA, QUIT. Nothing is
    kept open between alerts.
    """

    def __init__(self, config: SmtpConfig) -> None:
        self._config = config

    def _build_mime(self, message: EmailMessage) -> email.message.EmailMessage:
        mime = email.message.EmailMessage()
        mime["Subject"] = message.subject
        mime["From"] = message.sender
        mime["To"] = ", ".join(message.to)
        mime["Date"] = email.utils.formatdate(localtime=True)
        mime["Message-ID"] = email.utils.make_msgid(domain="alertcron")
        mime.set_content(message.body)
        return mime

    async def send(self, message: EmailMessage) -> str:
        mime = self._build_mime(message)
        await aiosmtplib.send(
            mime,
            sender=message.sender,
            recipients=message.to,
            hostname=self._config.hostname,
            port=self._config.port,
            username=self._config.username,
            password=self._config.password,
            use_tls=self._config.use_tls,
            start_tls=self._config.start_tls,
            timeout=self._config.timeout,
        )
        logger.debug("smtp.sent host=%s recipients=%d", self._config.hostname, len(message.to))
        return str(mime["Message-ID"])
