"""Error types raised while building a chart.

Every ``ChartError`` is meant to surface to the user as a "could not build chart"
reply; none of them is retried.
"""

from __future__ import annotations


class ChartError(ValueError):
    """Base class for request/data problems that prevent building a chart."""


class InvalidRequest(ChartError):
    """Series too short/long, bad span, or an unparseable chat command."""


class InvalidData(ChartError):
    """A price did not parse, or windowing removed every point."""


class DegenerateRange(ChartError):
    """Tick bounds are non-finite or ``max <= min``."""


class MarketDataError(RuntimeError):
    """The market-data endpoint refused the request or kept failing."""


__all__ = [
    "ChartError",
    "InvalidRequest",
    "InvalidData",
    "DegenerateRange",
    "MarketDataError",
]
