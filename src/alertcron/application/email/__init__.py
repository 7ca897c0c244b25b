"""Application email – mail alert configuration, sender port and notifier."""
from alertcron.application.email.message import EmailMessage, MailAlert
from alertcron.application.email.sender import EmailSender
from alertcron.application.email.in_memory import InMemoryEmailSender
from alertcron.application.email.smtp import SmtpConfig, SmtpEmailSender
from alertcron.application.email.notifier import MailNotifier

__all__ = [
    "EmailMessage",
    "EmailSender",
    "InMemoryEmailSender",
    "MailAlert",
    "MailNotifier",
    "SmtpConfig",
    "SmtpEmailSender",
]
