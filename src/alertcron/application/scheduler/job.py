"""Application scheduler – Job type and Schedule dataclass."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Awaitable, Callable, Union

__all__ = ["Job", "Schedule"]

# Raise to fail. Returning an exception instance fails too.
Job = Callable[[], Union[None, BaseException, Awaitable[Any]]]


@dataclass(frozen=True)
class Schedule:
    """When to run the job.

    ``interval_seconds == 0`` runs the job exactly once. ``lifetime_seconds``
    is an absolute cutoff from the scheduler start, checked after each sleep.
    """

    interval_seconds: float = 0.0
    lifetime_seconds: float | None = None

    def __post_init__(self) -> None:
        if self.interval_seconds < 0:
            raise ValueError("interval_seconds must be >= 0")
        if self.lifetime_seconds is not None and self.lifetime_seconds < 0:
            raise ValueError("lifetime_seconds must be >= 0")

    @property
    def run_once(self) -> bool:
        return self.interval_seconds == 0

    def expired(self, started_at: datetime, now: datetime) -> bool:
        if self.lifetime_seconds is None:
            return False
        return now > started_at + timedelta(seconds=self.lifetime_seconds)
