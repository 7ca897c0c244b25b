"""Application alerts – AlertSink port, file-backed sink and in-memory fake.

The sink is the last line of defence: every job failure and every notifier
failure is appended here. Records are never rewritten or truncated.
"""
from __future__ import annotations

import os
import tempfile
import threading
from pathlib import Path
from typing import Protocol, runtime_checkable

from alertcron.kernel.errors import SinkWriteError
from alertcron.kernel.time import Clock, SystemClock

__all__ = [
    "AlertSink",
    "FileAlertSink",
    "InMemoryAlertSink",
    "RECORD_TIME_FORMAT",
]

RECORD_TIME_FORMAT = "%Y/%m/%d %H:%M:%S"

_OPEN_FLAGS = os.O_WRONLY | os.O_APPEND | os.O_CREAT
_FILE_MODE = 0o600


@runtime_checkable
class AlertSink(Protocol):
    """Port: durable, append-only record of failures."""

    def resolve(self) -> Path | None:
        """Fix the backing location; idempotent."""
        ...

    def append(self, message: str) -> None:
        """Append one record; raises :class:`SinkWriteError` on failure."""
        ...


class FileAlertSink:
    """Append failure records to a text file, one timestamped line each.

    Line breaks inside a message are written as ``\\n`` so a multi-line
    error still reads back as a single record.

    When *path* is ``None`` a fresh file is created in the system temporary
    directory on first use and reused for the rest of the process.
    """

    def __init__(self, path: str | Path | None = None, clock: Clock | None = None) -> None:
        self._path: Path | None = Path(path) if path else None
        self._clock = clock or SystemClock()
        self._lock = threading.Lock()

    @property
    def path(self) -> Path | None:
        return self._path

    def resolve(self) -> Path:
        with self._lock:
            return self._resolve_locked()

    def _resolve_locked(self) -> Path:
        if self._path is None:
            try:
                fd, name = tempfile.mkstemp(prefix="alertcron", suffix=".log")
            except OSError as exc:
                raise SinkWriteError(tempfile.gettempdir(), exc) from exc
            os.close(fd)
            self._path = Path(name)
        return self._path

    def append(self, message: str) -> None:
        # one record per physical line
        text = message.replace("\r", "\\r").replace("\n", "\\n")
        line = f"{self._clock.now().strftime(RECORD_TIME_FORMAT)} {text}\n"
        with self._lock:
            path = self._resolve_locked()
            try:
                fd = os.open(path, _OPEN_FLAGS, _FILE_MODE)
                with os.fdopen(fd, "a", encoding="utf-8") as fh:
                    fh.write(line)
            except OSError as exc:
                raise SinkWriteError(str(path), exc) from exc

    def read_records(self) -> list[str]:
        """Return every record written so far (empty if nothing was written)."""
        if self._path is None or not self._path.exists():
            return []
        return self._path.read_text(encoding="utf-8").splitlines()


class InMemoryAlertSink:
    """Fake AlertSink that keeps records in a list.

    Set ``fail`` to make every append raise :class:`SinkWriteError`.
    """

    def __init__(self, fail: bool = False) -> None:
        self.records: list[str] = []
        self.fail = fail
        self.resolved = False

    def resolve(self) -> None:
        if self.fail:
            raise SinkWriteError("<memory>", OSError("sink unavailable"))
        self.resolved = True

    def append(self, message: str) -> None:
        if self.fail:
            raise SinkWriteError("<memory>", OSError("sink unavailable"))
        self.records.append(message)

    def matching(self, fragment: str) -> list[str]:
        return [r for r in self.records if fragment in r]

    @property
    def count(self) -> int:
        return len(self.records)
