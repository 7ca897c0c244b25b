"""Application alerts – what to do when the sink itself cannot be written."""
from __future__ import annotations

import enum
import sys

from alertcron.kernel.errors import SinkWriteError
from alertcron.observability.logging import get_logger

__all__ = ["SinkFailurePolicy", "escalate"]

_log = get_logger(__name__)


class SinkFailurePolicy(str, enum.Enum):
    """Escalation for :class:`SinkWriteError`.

    ``TERMINATE`` exits the process rather than drop a failure signal.
    ``STDERR`` writes the record to standard error and keeps running.
    """

    TERMINATE = "terminate"
    STDERR = "stderr"


def escalate(policy: SinkFailurePolicy, error: SinkWriteError, record: str) -> None:
    """Apply *policy* to a failed sink write of *record*.

    Raises :class:`SystemExit` under ``TERMINATE``.
    """
    _log.critical(
        "alert_sink.write_failed",
        path=error.path,
        record=record,
        error=str(error.cause),
        policy=policy.value,
    )
    if policy is SinkFailurePolicy.TERMINATE:
        raise SystemExit(1) from error
    sys.stderr.write(f"alertcron: {record}\n")
    sys.stderr.flush()
