"""Trailing-window filter for raw candle series.

Market data arrives as ``[timestamp_ms, price]`` pairs where the price is
usually a decimal string. The filter sorts the pairs, keeps only the points
within ``span_minutes`` of the latest timestamp (the *anchor*) and parses the
surviving prices into floats.
"""

from __future__ import annotations

import math
from typing import Any, Sequence

from coinchart.errors import InvalidData, InvalidRequest
from coinchart.utils import get_logger
from .types import TimeSeriesPoint

MIN_POINTS = 2
MAX_POINTS = 43_200
MS_PER_MINUTE = 60_000


def parse_price(raw: Any) -> float:
    """Parse a price field into a finite, non-negative float.

    Raises:
        InvalidData: if the value is not numeric, not finite or negative.
    """
    if isinstance(raw, bool):
        raise InvalidData(f"invalid price: {raw!r}")
    try:
        value = float(raw)
    except (TypeError, ValueError) as exc:
        raise InvalidData(f"invalid price: {raw!r}") from exc
    if not math.isfinite(value) or value < 0:
        raise InvalidData(f"invalid price: {raw!r}")
    return value


def _timestamp_of(item: Any) -> float:
    if isinstance(item, TimeSeriesPoint):
        return float(item.timestamp_ms)
    try:
        ts = float(item[0])
    except (TypeError, ValueError, IndexError, KeyError) as exc:
        raise InvalidData(f"malformed data point: {item!r}") from exc
    if not math.isfinite(ts):
        raise InvalidData(f"malformed data point: {item!r}")
    return ts


def _price_of(item: Any) -> Any:
    if isinstance(item, TimeSeriesPoint):
        return item.price
    try:
        return item[1]
    except (TypeError, IndexError, KeyError) as exc:
        raise InvalidData(f"malformed data point: {item!r}") from exc


class TimeWindowFilter:
    """Trim a series to the trailing ``span_minutes`` window."""

    def __init__(self) -> None:
        self.logger = get_logger("chart.window")

    def filter(self, series: Sequence[Any], span_minutes: int) -> list[TimeSeriesPoint]:
        """Return the sorted, parsed points within the trailing window.

        ``series`` items are ``[timestamp_ms, price]`` pairs or
        ``TimeSeriesPoint`` instances, so a filtered result can be filtered again.
        """
        if len(series) < MIN_POINTS or len(series) > MAX_POINTS:
            raise InvalidRequest(
                f"series must hold {MIN_POINTS}-{MAX_POINTS} points, got {len(series)}"
            )
        if not isinstance(span_minutes, int) or isinstance(span_minutes, bool) or span_minutes < 1:
            raise InvalidRequest(f"span must be a positive number of minutes, got {span_minutes!r}")

        # sorted() is stable: equal timestamps keep their input order
        keyed = sorted(((_timestamp_of(item), item) for item in series), key=lambda kv: kv[0])
        anchor = keyed[-1][0]

        points: list[TimeSeriesPoint] = []
        for ts, item in keyed:
            if (anchor - ts) / MS_PER_MINUTE > span_minutes:
                continue
            points.append(TimeSeriesPoint(timestamp_ms=int(ts), price=parse_price(_price_of(item))))

        if not points:
            raise InvalidData("no data points inside the requested span")

        self.logger.debug(
            "series_filtered",
            received=len(series),
            kept=len(points),
            span_minutes=span_minutes,
            anchor_ms=int(anchor),
        )
        return points


__all__ = ["TimeWindowFilter", "parse_price", "MIN_POINTS", "MAX_POINTS"]
