"""Chart preparation pipeline.

raw klines -> TimeWindowFilter -> (PriceFormatSelector, AdaptiveTickGenerator) -> ChartData

Drawing the PNG is left to a ``ChartRenderer`` supplied by the caller.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timezone, tzinfo
from typing import Any, Protocol, Sequence

from coinchart.binance import BinanceRestClient
from coinchart.config import Settings, get_settings
from coinchart.errors import DegenerateRange
from coinchart.utils import get_logger, ms_to_datetime, timestamp_ms
from .price_format import PriceFormatSelector
from .request import ChartRequest
from .ticks import AdaptiveTickGenerator
from .types import ChartData
from .window import TimeWindowFilter


class ChartRenderer(Protocol):
    def render(self, chart: ChartData) -> bytes:
        """Rasterize ``chart`` and return the encoded image."""
        ...


def prepare_chart(
    series: Sequence[Any],
    symbol: str,
    span_minutes: int,
    tz: tzinfo = timezone.utc,
) -> ChartData:
    """Build the renderer input for one chart.

    Raises:
        InvalidRequest / InvalidData: from the window filter.
        DegenerateRange: if the surviving points share a single timestamp.
    """
    points = TimeWindowFilter().filter(series, span_minutes)
    x_min, x_max = points[0].seconds, points[-1].seconds
    if x_max <= x_min:
        raise DegenerateRange(f"all {len(points)} points share timestamp {points[0].timestamp_ms}")

    price_format = PriceFormatSelector.select(symbol, points[-1].price)
    return ChartData(
        symbol=symbol,
        span_minutes=span_minutes,
        points=points,
        price_format=price_format,
        title=f"{symbol} {price_format.format(points[-1].price)}",
        x_min=x_min,
        x_max=x_max,
        ticks=AdaptiveTickGenerator(tz).generate(x_min, x_max),
    )


@dataclass(frozen=True)
class RenderedChart:
    request: ChartRequest
    chart: ChartData
    image: bytes


class ChartService:
    """Turn a chat command into a rendered chart."""

    def __init__(
        self,
        client: BinanceRestClient,
        renderer: ChartRenderer,
        settings: Settings | None = None,
    ):
        self.client = client
        self.renderer = renderer
        self.settings = settings or get_settings()
        self.tz = self.settings.chart_tzinfo
        self.logger = get_logger("chart.service")

    async def build(self, content: str) -> RenderedChart:
        started = timestamp_ms()
        request = ChartRequest.parse(
            content,
            default_symbol=self.settings.default_symbol,
            default_span=self.settings.default_span_minutes,
        )
        self.logger.info(
            "chart_requested",
            symbol=request.symbol,
            span_minutes=request.span_minutes,
            interval=request.interval,
            limit=request.limit,
        )

        klines = await self.client.get_klines(request.symbol, request.interval, request.limit)
        chart = prepare_chart(klines, request.symbol, request.span_minutes, self.tz)
        image = self.renderer.render(chart)

        self.logger.info(
            "chart_built",
            symbol=chart.symbol,
            title=chart.title,
            points=len(chart.points),
            ticks=len(chart.ticks),
            window_start=ms_to_datetime(chart.points[0].timestamp_ms, self.tz).isoformat(),
            window_end=ms_to_datetime(chart.points[-1].timestamp_ms, self.tz).isoformat(),
            image_bytes=len(image),
            elapsed_ms=timestamp_ms() - started,
        )
        return RenderedChart(request=request, chart=chart, image=image)


__all__ = ["ChartRenderer", "ChartService", "RenderedChart", "prepare_chart"]
