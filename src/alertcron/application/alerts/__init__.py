"""Application alerts – sink, sink failure policy and coordinator."""
from alertcron.application.alerts.sink import (
    RECORD_TIME_FORMAT,
    AlertSink,
    FileAlertSink,
    InMemoryAlertSink,
)
from alertcron.application.alerts.policy import SinkFailurePolicy, escalate
from alertcron.application.alerts.coordinator import DEFAULT_MAIL_TIMEOUT_SECONDS, AlertCoordinator

__all__ = [
    "DEFAULT_MAIL_TIMEOUT_SECONDS",
    "RECORD_TIME_FORMAT",
    "AlertCoordinator",
    "AlertSink",
    "FileAlertSink",
    "InMemoryAlertSink",
    "SinkFailurePolicy",
    "escalate",
]
