"""Adaptive time-axis ticks.

The requested span can be anything from a few minutes to several years, so a
fixed tick interval either floods the axis or leaves it empty. The generator
walks a cursor from ``min`` to ``max`` in local time and decides per position
whether to emit a tick and whether to label it:

* The cursor resolution (10 minutes / 1 hour / 1 day) and the initial snap to
  a round boundary depend on the width of the range.
* The density rule (which positions get a tick, which ticks get a label and the
  label format) is looked up in an ordered threshold table. Up to ~90 days the
  rules count steps; beyond that they anchor to calendar days (1st/15th of the
  month, 1st of January) so labels line up with month boundaries.

All thresholds are in seconds of ``max - min`` and every lower bound is inclusive.
"""

from __future__ import annotations

import math
from bisect import bisect_right
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone, tzinfo
from typing import Callable

from coinchart.errors import DegenerateRange
from .types import Tick

# Resolution thresholds (seconds). The same constant bounds hourly snapping and
# hourly stepping.
TEN_MINUTE_RESOLUTION_BELOW = 15_000
HOURLY_RESOLUTION_BELOW = 90_000

# Density thresholds (seconds)
TEN_DAYS = 864_000
NINETY_DAYS = 7_776_000
ONE_EIGHTY_DAYS = 15_552_000
EIGHTEEN_MONTHS = 47_347_200


def _floor_ten_minutes(dt: datetime) -> datetime:
    return dt.replace(minute=dt.minute - dt.minute % 10, second=0, microsecond=0)


def _floor_hour(dt: datetime) -> datetime:
    return dt.replace(minute=0, second=0, microsecond=0)


def _floor_day(dt: datetime) -> datetime:
    return dt.replace(hour=0, minute=0, second=0, microsecond=0)


def _elapsed(step: timedelta) -> Callable[[datetime], datetime]:
    """Advance by absolute elapsed time (DST-safe for sub-day steps)."""

    def advance(dt: datetime) -> datetime:
        return (dt.astimezone(timezone.utc) + step).astimezone(dt.tzinfo)

    return advance


def _next_calendar_day(dt: datetime) -> datetime:
    # Aware datetime arithmetic is wall-clock: midnight stays midnight
    return dt + timedelta(days=1)


@dataclass(frozen=True)
class Resolution:
    upper: float
    snap: Callable[[datetime], datetime]
    advance: Callable[[datetime], datetime]


RESOLUTIONS: tuple[Resolution, ...] = (
    Resolution(TEN_MINUTE_RESOLUTION_BELOW, _floor_ten_minutes, _elapsed(timedelta(minutes=10))),
    Resolution(HOURLY_RESOLUTION_BELOW, _floor_hour, _elapsed(timedelta(hours=1))),
    Resolution(math.inf, _floor_day, _next_calendar_day),
)


def _every(dt: datetime, count: int) -> bool:
    return True


def _every_fifth_step(dt: datetime, count: int) -> bool:
    return count % 5 == 0


def _first_or_every_fifth_day(dt: datetime, count: int) -> bool:
    return dt.day == 1 or dt.day % 5 == 0


def _first_or_fifteenth(dt: datetime, count: int) -> bool:
    return dt.day in (1, 15)


def _first_of_month(dt: datetime, count: int) -> bool:
    return dt.day == 1


def _first_of_year(dt: datetime, count: int) -> bool:
    return dt.day == 1 and dt.month == 1


@dataclass(frozen=True)
class DensityRule:
    """Ticks are emitted where ``emit`` holds and labelled where ``label`` holds."""

    upper: float
    label_format: str
    emit: Callable[[datetime, int], bool]
    label: Callable[[datetime, int], bool]


DENSITY_RULES: tuple[DensityRule, ...] = (
    DensityRule(HOURLY_RESOLUTION_BELOW, "%H:%M", _every, _every),
    DensityRule(TEN_DAYS, "%m/%d", _every, _every),
    DensityRule(NINETY_DAYS, "%m/%d", _every, _every_fifth_step),
    DensityRule(ONE_EIGHTY_DAYS, "%m/%d", _first_or_every_fifth_day, _first_or_fifteenth),
    DensityRule(EIGHTEEN_MONTHS, "%Y/%m", _first_or_fifteenth, _first_of_month),
    DensityRule(math.inf, "%Y/%m", _first_of_month, _first_of_year),
)

_RESOLUTION_UPPERS = [r.upper for r in RESOLUTIONS]
_DENSITY_UPPERS = [r.upper for r in DENSITY_RULES]


def resolution_for(delta: float) -> Resolution:
    return RESOLUTIONS[bisect_right(_RESOLUTION_UPPERS, delta)]


def density_rule_for(delta: float) -> DensityRule:
    return DENSITY_RULES[bisect_right(_DENSITY_UPPERS, delta)]


class AdaptiveTickGenerator:
    """Generate time-axis ticks for ``[min_seconds, max_seconds]`` in a given zone."""

    def __init__(self, tz: tzinfo = timezone.utc):
        self.tz = tz

    def _local(self, seconds: float) -> datetime:
        # Whole seconds, truncated toward zero
        return datetime.fromtimestamp(int(seconds), tz=self.tz)

    def generate(self, min_seconds: float, max_seconds: float) -> list[Tick]:
        """Return ticks ordered by position.

        Raises:
            DegenerateRange: if a bound is not finite or ``max_seconds <= min_seconds``.
        """
        if not (math.isfinite(min_seconds) and math.isfinite(max_seconds)):
            raise DegenerateRange(f"non-finite tick range: [{min_seconds}, {max_seconds}]")
        if max_seconds <= min_seconds:
            raise DegenerateRange(f"empty tick range: [{min_seconds}, {max_seconds}]")

        delta = max_seconds - min_seconds
        resolution = resolution_for(delta)
        rule = density_rule_for(delta)

        cursor = resolution.snap(self._local(min_seconds))
        end = resolution.snap(self._local(max_seconds))

        ticks: list[Tick] = []
        count = 0
        while cursor <= end:
            if rule.emit(cursor, count):
                label = cursor.strftime(rule.label_format) if rule.label(cursor, count) else ""
                ticks.append(Tick(position=float(cursor.timestamp()), label=label))
            count += 1
            cursor = resolution.advance(cursor)
        return ticks


__all__ = [
    "AdaptiveTickGenerator",
    "DensityRule",
    "Resolution",
    "density_rule_for",
    "resolution_for",
]
