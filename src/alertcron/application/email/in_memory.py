"""Application email – InMemoryEmailSender for unit tests."""
from __future__ import annotations

import uuid

from alertcron.application.email.message import EmailMessage

__all__ = ["InMemoryEmailSender"]


class InMemoryEmailSender:
    """Fake EmailSender that captures alert mails instead of dialing SMTP."""

    def __init__(self) -> None:
        self.sent: list[EmailMessage] = []

    async def send(self, message: EmailMessage) -> str:
        self.sent.append(message)
        return str(uuid.uuid4())

    @property
    def count(self) -> int:
        return len(self.sent)

    def last(self) -> EmailMessage | None:
        return self.sent[-1] if self.sent else None
