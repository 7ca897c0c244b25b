"""Kernel error hierarchy – public re-export surface.

Hierarchy::

    BaseError
    ├── AlertError                 (alerts.py)
    │   ├── JobFailure
    │   │   └── JobTimeout
    │   ├── NotifierFailure
    │   │   ├── MailNotifierFailure
    │   │   └── BrowserNotifierFailure
    │   ├── NotifierTimeout
    │   └── SinkWriteError
    ├── BrowserNotifierError       (notifiers.py)
    └── ConfigError                (alertcron.config.validation)
"""

from alertcron.kernel.errors.alerts import (
    AlertError,
    BrowserNotifierFailure,
    JobFailure,
    JobTimeout,
    MailNotifierFailure,
    NotifierFailure,
    NotifierTimeout,
    SinkWriteError,
)
from alertcron.kernel.errors.base import BaseError
from alertcron.kernel.errors.notifiers import BrowserNotifierError

__all__ = [
    "AlertError",
    "BaseError",
    "BrowserNotifierError",
    "BrowserNotifierFailure",
    "JobFailure",
    "JobTimeout",
    "MailNotifierFailure",
    "NotifierFailure",
    "NotifierTimeout",
    "SinkWriteError",
]
