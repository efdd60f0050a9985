"""Small time helpers."""

from __future__ import annotations

import time
from datetime import datetime, timezone, tzinfo


def timestamp_ms() -> int:
    """Current Unix time in milliseconds."""
    return int(time.time() * 1000)


def ms_to_datetime(ts_ms: int | float, tz: tzinfo = timezone.utc) -> datetime:
    """Convert a millisecond timestamp to an aware datetime in ``tz``."""
    return datetime.fromtimestamp(ts_ms / 1000, tz=timezone.utc).astimezone(tz)
