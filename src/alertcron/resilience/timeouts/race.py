"""Resilience – TimeoutRace.

Races an operation against a timer and returns whichever resolves first.
Unlike :func:`asyncio.wait_for`, the operation is *not* cancelled when the
timer wins: it keeps running detached, and its eventual result or exception
is consumed and discarded. A straggler lives only as long as its event loop;
``asyncio.run`` cancels whatever is still pending when the loop ends.
"""
from __future__ import annotations

import asyncio
import dataclasses
import time
from typing import Awaitable, Callable, Generic, TypeVar

from alertcron.observability.logging import get_logger

T = TypeVar("T")

_log = get_logger(__name__)


@dataclasses.dataclass(frozen=True)
class RaceOutcome(Generic[T]):
    """Result of a single race.

    Exactly one of three shapes: timed out, completed with ``error``, or
    completed with ``value``.
    """

    timed_out: bool
    value: T | None = None
    error: BaseException | None = None
    elapsed_ms: float = 0.0

    @property
    def succeeded(self) -> bool:
        return not self.timed_out and self.error is None


class TimeoutRace(Generic[T]):
    """First-completion selection between an operation and a timer.

    Parameters
    ----------
    timeout_seconds:
        Budget granted to the operation.
    name:
        Label used in log events.
    """

    def __init__(self, timeout_seconds: float, name: str = "race") -> None:
        if timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be > 0")
        self.timeout_seconds = timeout_seconds
        self.name = name
        self._stragglers: set[asyncio.Future[T]] = set()

    @property
    def pending(self) -> int:
        """Number of operations that lost a race and are still running."""
        return len(self._stragglers)

    async def run(self, fn: Callable[[], Awaitable[T]]) -> RaceOutcome[T]:
        started = time.monotonic()
        task: asyncio.Future[T] = asyncio.ensure_future(fn())
        timer = asyncio.ensure_future(asyncio.sleep(self.timeout_seconds))
        done, _ = await asyncio.wait({task, timer}, return_when=asyncio.FIRST_COMPLETED)
        elapsed_ms = (time.monotonic() - started) * 1000

        # the operation wins ties
        if task in done:
            timer.cancel()
            if task.cancelled():
                return RaceOutcome(timed_out=False, error=asyncio.CancelledError(), elapsed_ms=elapsed_ms)
            exc = task.exception()
            if exc is not None:
                return RaceOutcome(timed_out=False, error=exc, elapsed_ms=elapsed_ms)
            return RaceOutcome(timed_out=False, value=task.result(), elapsed_ms=elapsed_ms)

        self._detach(task)
        return RaceOutcome(timed_out=True, elapsed_ms=elapsed_ms)

    def _detach(self, task: asyncio.Future[T]) -> None:
        self._stragglers.add(task)
        task.add_done_callback(self._discard)

    def _discard(self, task: asyncio.Future[T]) -> None:
        self._stragglers.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        _log.debug("race.straggler_discarded", race=self.name, error=repr(exc) if exc else None)


__all__ = ["RaceOutcome", "TimeoutRace"]
