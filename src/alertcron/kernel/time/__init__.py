"""Kernel time – Clock port + implementations."""
from alertcron.kernel.time.clock import Clock, FrozenClock, SystemClock

__all__ = ["Clock", "FrozenClock", "SystemClock"]
