"""Chat command parsing: ``<command> [duration] [SYMBOL]``.

Examples::

    chart                -> BTCJPY, last 180 minutes
    chart 3h ETHUSD      -> ETHUSD, last 180 minutes
    chart 2d12h          -> BTCJPY, last 3600 minutes

Durations use Go-style unit suffixes and may be chained (``1w2d``, ``2h30m``).
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import timedelta

from coinchart.errors import InvalidRequest

_UNIT_SECONDS: dict[str, float] = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "μs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
    "d": 86400.0,
    "w": 604800.0,
}

_DURATION_PART_RE = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h|d|w)")
_DURATION_RE = re.compile(rf"^(?:{_DURATION_PART_RE.pattern})+$")
_SYMBOL_RE = re.compile(r"^[A-Z]+$")

# (minimum span in minutes, kline interval, interval minutes); first match wins
INTERVALS: tuple[tuple[int, str, int], ...] = (
    (3000, "30m", 30),
    (1000, "5m", 5),
    (0, "1m", 1),
)
MAX_KLINES = 1000


def parse_duration(token: str) -> timedelta | None:
    """Parse ``1h30m``-style durations; ``None`` if the token is not a duration."""
    if not _DURATION_RE.match(token):
        return None
    seconds = 0.0
    for number, unit in _DURATION_PART_RE.findall(token):
        seconds += float(number) * _UNIT_SECONDS[unit]
    return timedelta(seconds=seconds)


@dataclass(frozen=True)
class ChartRequest:
    symbol: str
    span_minutes: int

    @classmethod
    def parse(
        cls,
        content: str,
        default_symbol: str = "BTCJPY",
        default_span: int = 180,
    ) -> "ChartRequest":
        """Parse chat content; the first token is the command itself.

        Raises:
            InvalidRequest: on a token that is neither a duration nor a symbol,
                or on a span shorter than one minute.
        """
        symbol = default_symbol
        span = default_span
        for token in content.split()[1:]:
            duration = parse_duration(token)
            if duration is not None:
                span = int(duration.total_seconds() // 60)
                if span < 1:
                    raise InvalidRequest(f"span too short: {token}")
            elif _SYMBOL_RE.match(token):
                symbol = token
            else:
                raise InvalidRequest(f"unrecognised argument: {token}")
        return cls(symbol=symbol, span_minutes=span)

    @property
    def _interval(self) -> tuple[str, int]:
        for min_span, interval, minutes in INTERVALS:
            if self.span_minutes >= min_span:
                return interval, minutes
        return INTERVALS[-1][1], INTERVALS[-1][2]

    @property
    def interval(self) -> str:
        """Kline interval: coarser candles for longer spans."""
        return self._interval[0]

    @property
    def limit(self) -> int:
        """Candles needed to cover the span including both endpoints."""
        return min(MAX_KLINES, self.span_minutes // self._interval[1] + 1)


__all__ = ["ChartRequest", "parse_duration", "INTERVALS", "MAX_KLINES"]
