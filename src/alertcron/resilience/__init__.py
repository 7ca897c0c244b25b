"""Resilience – timeout races."""
