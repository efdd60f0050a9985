"""Value types passed between the chart preparation stages."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class TimeSeriesPoint:
    """A parsed candle sample."""
    timestamp_ms: int
    price: float

    @property
    def seconds(self) -> float:
        return self.timestamp_ms / 1000


@dataclass(frozen=True)
class Tick:
    """A time-axis tick. An empty label marks a minor gridline."""
    position: float
    label: str = ""

    @property
    def is_major(self) -> bool:
        return bool(self.label)


@dataclass(frozen=True)
class PriceFormat:
    currency_prefix: str
    decimal_pattern: str

    @property
    def pattern(self) -> str:
        """printf-style pattern handed to the y-axis ticker."""
        return self.currency_prefix + self.decimal_pattern

    def format(self, value: float) -> str:
        return self.pattern % value


@dataclass(frozen=True)
class ChartData:
    """Everything the renderer needs to draw one chart."""

    symbol: str
    span_minutes: int
    points: list[TimeSeriesPoint]
    price_format: PriceFormat
    title: str
    x_min: float
    x_max: float
    ticks: list[Tick] = field(default_factory=list)

    @property
    def last_price(self) -> float:
        return self.points[-1].price


__all__ = ["TimeSeriesPoint", "Tick", "PriceFormat", "ChartData"]
