"""Chart data preparation: windowing, price format and time-axis ticks."""

from .types import ChartData, PriceFormat, Tick, TimeSeriesPoint
from .window import TimeWindowFilter, parse_price
from .price_format import PriceFormatSelector
from .ticks import AdaptiveTickGenerator
from .request import ChartRequest, parse_duration
from .pipeline import ChartRenderer, ChartService, RenderedChart, prepare_chart

__all__ = [
    "AdaptiveTickGenerator",
    "ChartData",
    "ChartRenderer",
    "ChartRequest",
    "ChartService",
    "PriceFormat",
    "PriceFormatSelector",
    "RenderedChart",
    "Tick",
    "TimeSeriesPoint",
    "TimeWindowFilter",
    "parse_duration",
    "parse_price",
    "prepare_chart",
]
