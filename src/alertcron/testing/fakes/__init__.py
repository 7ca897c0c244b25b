"""Testing fakes – stand-ins for jobs, mail transports and URL openers."""
from alertcron.application.alerts import InMemoryAlertSink
from alertcron.application.email import InMemoryEmailSender
from alertcron.kernel.time import FrozenClock
from alertcron.testing.fakes.browser import RecordingOpener
from alertcron.testing.fakes.mail import FailingEmailSender, SlowEmailSender
from alertcron.testing.fakes.job import AdvancingSleep, FailingJob, ScriptedJob

__all__ = [
    "AdvancingSleep",
    "FailingEmailSender",
    "FailingJob",
    "FrozenClock",
    "InMemoryAlertSink",
    "InMemoryEmailSender",
    "RecordingOpener",
    "ScriptedJob",
    "SlowEmailSender",
]
