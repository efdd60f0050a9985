"""Logging and time helpers."""

from .helpers import ms_to_datetime, timestamp_ms
from .logging import get_logger, setup_logging

__all__ = [
    "get_logger",
    "setup_logging",
    "ms_to_datetime",
    "timestamp_ms",
]
