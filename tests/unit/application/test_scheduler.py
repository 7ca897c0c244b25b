"""Unit tests for the Cron tick loop."""
from __future__ import annotations

import asyncio
import threading
import time

import pytest

from alertcron.application.alerts import FileAlertSink, InMemoryAlertSink, SinkFailurePolicy
from alertcron.application.email import MailAlert, MailNotifier
from alertcron.application.notifications import BrowserNotification, BrowserNotifier
from alertcron.application.scheduler import Cron, Schedule
from alertcron.config import CronSettings
from alertcron.testing.fakes import (
    AdvancingSleep,
    FailingJob,
    FrozenClock,
    InMemoryEmailSender,
    RecordingOpener,
    ScriptedJob,
    SlowEmailSender,
)


def _cron(job, schedule: Schedule, sink: InMemoryAlertSink | None = None, **kwargs) -> tuple[Cron, AdvancingSleep]:
    clock = FrozenClock()
    sleep = AdvancingSleep(clock)
    cron = Cron(job, schedule, sink=sink or InMemoryAlertSink(), clock=clock, sleep=sleep, **kwargs)
    return cron, sleep


# ---------------------------------------------------------------------------
# Schedule
# ---------------------------------------------------------------------------
class TestSchedule:
    def test_default_runs_once(self) -> None:
        assert Schedule().run_once is True

    def test_interval_disables_run_once(self) -> None:
        assert Schedule(interval_seconds=60).run_once is False

    def test_negative_values_rejected(self) -> None:
        with pytest.raises(ValueError):
            Schedule(interval_seconds=-1)
        with pytest.raises(ValueError):
            Schedule(interval_seconds=1, lifetime_seconds=-1)

    def test_expired_is_strictly_after_cutoff(self) -> None:
        clock = FrozenClock()
        start = clock.now()
        schedule = Schedule(interval_seconds=1, lifetime_seconds=30)
        clock.advance(seconds=30)
        assert not schedule.expired(start, clock.now())
        clock.advance(seconds=1)
        assert schedule.expired(start, clock.now())

    def test_no_lifetime_never_expires(self) -> None:
        clock = FrozenClock()
        start = clock.now()
        clock.advance(days=365)
        assert not Schedule(interval_seconds=1).expired(start, clock.now())


# ---------------------------------------------------------------------------
# Loop termination
# ---------------------------------------------------------------------------
class TestCronLoop:
    def test_interval_zero_runs_exactly_once(self) -> None:
        job = ScriptedJob(None)
        cron, sleep = _cron(job, Schedule(interval_seconds=0))
        cron.run()
        assert job.calls == 1
        assert cron.runs == 1
        assert sleep.slept == []

    def test_interval_zero_runs_once_even_on_failure(self) -> None:
        job = FailingJob("disk full")
        sink = InMemoryAlertSink()
        cron, _ = _cron(job, Schedule(), sink)
        cron.run()
        assert job.calls == 1
        assert sink.records == ["disk full"]

    def test_lifetime_shorter_than_interval_gives_one_tick(self) -> None:
        job = ScriptedJob(None)
        cron, sleep = _cron(job, Schedule(interval_seconds=60, lifetime_seconds=30))
        cron.run()
        assert job.calls == 1
        assert sleep.slept == [60]  # the sleep happens before the lifetime check

    def test_lifetime_bounds_number_of_ticks(self) -> None:
        job = ScriptedJob(None)
        cron, sleep = _cron(job, Schedule(interval_seconds=10, lifetime_seconds=35))
        cron.run()
        # ticks at t=0,10,20,30; after the sleep to t=40 the lifetime is over
        assert job.calls == 4
        assert len(sleep.slept) == 4

    def test_lifetime_is_measured_from_start_not_last_tick(self) -> None:
        clock = FrozenClock()
        sleep = AdvancingSleep(clock)

        def slow_job() -> None:
            clock.advance(seconds=25)

        cron = Cron(
            slow_job,
            Schedule(interval_seconds=10, lifetime_seconds=60),
            sink=InMemoryAlertSink(),
            clock=clock,
            sleep=sleep,
        )
        cron.run()
        # t=0 run → 25, sleep → 35; run → 60, sleep → 70 > 60
        assert cron.runs == 2

    def test_real_sleep_with_short_lifetime(self) -> None:
        job = ScriptedJob(None)
        cron = Cron(job, Schedule(interval_seconds=0.05, lifetime_seconds=0.01), sink=InMemoryAlertSink())
        cron.run()
        assert job.calls == 1

    def test_run_returns_none(self) -> None:
        cron, _ = _cron(ScriptedJob(None), Schedule())
        assert cron.run() is None


# ---------------------------------------------------------------------------
# Job shapes
# ---------------------------------------------------------------------------
class TestJobShapes:
    def test_failure_per_failed_tick(self) -> None:
        job = ScriptedJob(RuntimeError("a"), None, RuntimeError("b"))
        sink = InMemoryAlertSink()
        cron, _ = _cron(job, Schedule(interval_seconds=1, lifetime_seconds=2.5), sink)
        cron.run()
        assert job.calls == 3
        assert sink.records == ["a", "b"]

    def test_async_job(self) -> None:
        calls = []

        async def job() -> None:
            calls.append(True)
            raise RuntimeError("async boom")

        sink = InMemoryAlertSink()
        cron, _ = _cron(job, Schedule(), sink)
        cron.run()
        assert calls == [True]
        assert sink.records == ["async boom"]

    def test_returned_error_value_counts_as_failure(self) -> None:
        sink = InMemoryAlertSink()
        cron, _ = _cron(lambda: ValueError("returned"), Schedule(), sink)
        cron.run()
        assert sink.records == ["returned"]

    def test_other_return_values_are_success(self) -> None:
        sink = InMemoryAlertSink()
        cron, _ = _cron(lambda: "ok", Schedule(), sink)
        cron.run()
        assert sink.records == []

    def test_base_exceptions_are_not_swallowed(self) -> None:
        class Abort(BaseException):
            pass

        def job() -> None:
            raise Abort

        cron, _ = _cron(job, Schedule())
        with pytest.raises(Abort):
            cron.run()


# ---------------------------------------------------------------------------
# Job timeout / overlap
# ---------------------------------------------------------------------------
class TestJobTimeout:
    def test_timeout_recorded_and_overlapping_tick_skipped(self) -> None:
        release = threading.Event()
        calls = []

        def stuck_job() -> None:
            calls.append(True)
            release.wait(5)

        sink = InMemoryAlertSink()

        async def run() -> Cron:
            cron = Cron(
                stuck_job,
                Schedule(interval_seconds=0.05, lifetime_seconds=0.12),
                sink=sink,
                job_timeout_seconds=0.02,
            )
            await cron.run_async()
            release.set()
            return cron

        cron = asyncio.run(run())
        assert len(calls) == 1
        assert cron.runs == 1
        assert cron.skipped >= 1
        assert sink.matching("job did not finish within 0.02s") == sink.records
        assert len(sink.records) == 1

    def test_run_returns_when_lifetime_ends_despite_hung_job(self) -> None:
        release = threading.Event()
        sink = InMemoryAlertSink()
        cron = Cron(
            lambda: release.wait(6),
            Schedule(interval_seconds=0.2, lifetime_seconds=0.1),
            sink=sink,
            job_timeout_seconds=0.1,
        )
        started = time.monotonic()
        try:
            cron.run()
            elapsed = time.monotonic() - started
        finally:
            release.set()
        assert elapsed < 1.0
        assert sink.records == ["job did not finish within 0.1s"]

    def test_hung_job_runs_on_daemon_thread(self) -> None:
        release = threading.Event()
        seen = []

        def job() -> None:
            seen.append(threading.current_thread())
            release.wait(6)

        cron = Cron(job, Schedule(), sink=InMemoryAlertSink(), job_timeout_seconds=0.05)
        try:
            cron.run()
        finally:
            release.set()
        assert seen[0].daemon is True
        assert seen[0] is not threading.main_thread()

    def test_pending_mail_is_cancelled_when_run_returns(self) -> None:
        sender = SlowEmailSender(delay=5)
        mail = MailNotifier(MailAlert(subject="s", to=["a@x.com"], sender="f@x.com", smtp="localhost:25"), sender=sender)
        sink = InMemoryAlertSink()
        cron = Cron(FailingJob("disk full"), Schedule(), sink=sink, mail=mail, mail_timeout_seconds=0.05)
        started = time.monotonic()
        cron.run()
        assert time.monotonic() - started < 1.0
        assert cron.coordinator.pending_mail == 0
        assert sender.count == 0
        assert sink.records[0] == "disk full"
        assert sink.records[1].startswith("timed out sending mail alert")

    def test_async_job_within_budget(self) -> None:
        async def job() -> None:
            await asyncio.sleep(0)
            raise RuntimeError("quick failure")

        sink = InMemoryAlertSink()
        cron, _ = _cron(job, Schedule(), sink, job_timeout_seconds=1.0)
        cron.run()
        assert sink.records == ["quick failure"]

    def test_sync_job_within_budget_returning_error(self) -> None:
        sink = InMemoryAlertSink()
        cron, _ = _cron(lambda: OSError("returned"), Schedule(), sink, job_timeout_seconds=1.0)
        cron.run()
        assert sink.records == ["returned"]


# ---------------------------------------------------------------------------
# Setup
# ---------------------------------------------------------------------------
class TestCronSetup:
    def test_sink_resolved_before_first_tick(self) -> None:
        sink = InMemoryAlertSink()
        seen = []
        cron, _ = _cron(lambda: seen.append(sink.resolved), Schedule(), sink)
        cron.run()
        assert seen == [True]

    def test_default_sink_is_temp_file(self) -> None:
        cron = Cron(FailingJob("disk full"), Schedule())
        cron.run()
        assert isinstance(cron.sink, FileAlertSink)
        try:
            records = cron.sink.read_records()
            assert len(records) == 1
            assert records[0].endswith("disk full")
        finally:
            cron.sink.path.unlink()

    def test_unresolvable_sink_terminates(self) -> None:
        cron, _ = _cron(ScriptedJob(None), Schedule(), InMemoryAlertSink(fail=True))
        with pytest.raises(SystemExit):
            cron.run()

    def test_unresolvable_sink_with_stderr_policy_keeps_running(self, capsys: pytest.CaptureFixture[str]) -> None:
        job = FailingJob("disk full")
        cron, _ = _cron(
            job,
            Schedule(),
            InMemoryAlertSink(fail=True),
            sink_failure_policy=SinkFailurePolicy.STDERR,
        )
        cron.run()
        assert job.calls == 1
        assert "alertcron: disk full" in capsys.readouterr().err

    def test_configs_are_wrapped_into_notifiers(self) -> None:
        cron = Cron(
            ScriptedJob(None),
            mail=MailAlert(subject="s", to=["a@x.com"], sender="f@x.com", smtp="localhost:25"),
            browser=BrowserNotification(host="127.0.0.1:0"),
        )
        assert isinstance(cron.coordinator.mail, MailNotifier)
        assert isinstance(cron.coordinator.browser, BrowserNotifier)

    def test_browser_started_before_first_tick(self) -> None:
        opener = RecordingOpener()
        browser = BrowserNotifier(BrowserNotification(host="127.0.0.1:0"), opener=opener)
        sink = InMemoryAlertSink()
        cron, _ = _cron(FailingJob("disk full"), Schedule(), sink, browser=browser)
        cron.run()
        assert opener.urls == [browser.url]
        assert sink.records == ["disk full"]

    def test_browser_start_failure_is_recorded_and_loop_continues(self) -> None:
        blocker = BrowserNotifier(BrowserNotification(host="127.0.0.1:0"), opener=RecordingOpener())
        taken = blocker.start()
        browser = BrowserNotifier(BrowserNotification(host=taken), opener=RecordingOpener())
        job = FailingJob("disk full")
        sink = InMemoryAlertSink()
        cron, _ = _cron(job, Schedule(), sink, browser=browser)
        cron.run()
        assert job.calls == 1
        assert sink.records[0].startswith("could not open notification: could not listen")
        assert sink.records[1] == "could not open notification: notification endpoint not started"
        assert sink.records[2] == "disk full"


# ---------------------------------------------------------------------------
# from_settings
# ---------------------------------------------------------------------------
class TestFromSettings:
    def test_builds_schedule_and_channels(self, tmp_path) -> None:
        settings = CronSettings(
            interval_seconds=60,
            lifetime_seconds=30,
            sink_path=str(tmp_path / "alerts.log"),
            sink_failure_policy="stderr",
            mail_smtp="localhost:2525",
            mail_to=["ops@x.com"],
            mail_from="cron@x.com",
            mail_timeout_seconds=3,
        )
        cron = Cron.from_settings(ScriptedJob(None), settings)
        assert cron.schedule == Schedule(60, 30)
        assert isinstance(cron.sink, FileAlertSink)
        assert cron.sink.path == tmp_path / "alerts.log"
        assert cron.coordinator.sink_failure_policy is SinkFailurePolicy.STDERR
        assert cron.coordinator.mail_timeout_seconds == 3
        assert cron.coordinator.mail is not None
        assert cron.coordinator.browser is None

    def test_overrides_win(self) -> None:
        sink = InMemoryAlertSink()
        cron = Cron.from_settings(ScriptedJob(None), CronSettings(), sink=sink)
        assert cron.sink is sink

    def test_settings_driven_run(self) -> None:
        sender = InMemoryEmailSender()
        settings = CronSettings(mail_smtp="localhost:2525", mail_to=["ops@x.com"], mail_from="cron@x.com")
        mail = MailNotifier(settings.mail_alert(), sender=sender)
        sink = InMemoryAlertSink()
        cron = Cron.from_settings(FailingJob("disk full"), settings, sink=sink, mail=mail)
        cron.run()
        assert sink.records == ["disk full"]
        assert sender.last().body == "disk full"
