"""Observability – structured logging helpers."""
from alertcron.observability.logging.filters import DEFAULT_SENSITIVE_FIELDS, SensitiveFieldsFilter
from alertcron.observability.logging.processors import RedactionProcessor, get_logger
from alertcron.observability.logging.factory import JsonLoggerFactory

__all__ = [
    "DEFAULT_SENSITIVE_FIELDS",
    "JsonLoggerFactory",
    "RedactionProcessor",
    "SensitiveFieldsFilter",
    "get_logger",
]
