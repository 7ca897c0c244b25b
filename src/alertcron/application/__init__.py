"""Application layer – scheduler, alert fan-out and notification channels."""
