"""Application email – MailAlert configuration and EmailMessage value object."""
from __future__ import annotations

from dataclasses import dataclass, field

__all__ = ["EmailMessage", "MailAlert"]


@dataclass(frozen=True)
class MailAlert:
    """Where and how to send a failure e-mail.

    ``smtp`` is the transport endpoint as ``host:port`` (port defaults to 25).
    """

    subject: str
    to: list[str]
    sender: str
    smtp: str
    username: str | None = None
    password: str | None = field(default=None, repr=False)
    start_tls: bool = False
    timeout: float = 30.0

    def __post_init__(self) -> None:
        if not self.to:
            raise ValueError("MailAlert needs at least one recipient")
        if not self.smtp:
            raise ValueError("MailAlert needs an SMTP endpoint")

    @property
    def hostname(self) -> str:
        host, _, _ = self.smtp.rpartition(":")
        return host or self.smtp

    @property
    def port(self) -> int:
        host, _, port = self.smtp.rpartition(":")
        return int(port) if host and port else 25


@dataclass
class EmailMessage:
    """A fully-resolved plain-text email ready to be sent."""

    to: list[str]
    subject: str
    sender: str
    body: str

    def render(self) -> str:
        """Return the message as a human-readable transcript."""
        return f"Subject: {self.subject}\nFrom: {self.sender}\n\n{self.body}"
