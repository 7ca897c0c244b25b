"""Resilience – bounded waits that never cancel the operation they bound."""
from alertcron.resilience.timeouts.race import RaceOutcome, TimeoutRace

__all__ = ["RaceOutcome", "TimeoutRace"]
