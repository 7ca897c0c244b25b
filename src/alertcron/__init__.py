"""
alertcron – run a job periodically and alert on failure.

Import path convention::

    from alertcron.application.scheduler import Cron, Schedule
    from alertcron.application.email import MailAlert
    from alertcron.application.notifications import BrowserNotification
    from alertcron.application.alerts import FileAlertSink, SinkFailurePolicy
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
