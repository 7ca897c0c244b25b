"""Application email – EmailSender Protocol (port)."""
from __future__ import annotations

from typing import Protocol, runtime_checkable

from alertcron.application.email.message import EmailMessage

__all__ = ["EmailSender"]


@runtime_checkable
class EmailSender(Protocol):
    """Port: one-shot dispatch of a single message."""

    async def send(self, message: EmailMessage) -> str:
        """Send *message*; returns an opaque message-id string."""
        ...
