"""Price chart bot: candle windowing, price formatting and adaptive time-axis ticks."""

__version__ = "0.1.0"
