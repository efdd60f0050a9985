"""Pick the title/y-axis price format from the symbol and the last price."""

from __future__ import annotations

import math

from .types import PriceFormat

# First match wins
CURRENCY_PREFIXES: tuple[tuple[str, str], ...] = (
    ("JPY", "¥"),
    ("USD", "$"),
    ("BTC", "₿ "),
)

FINE_PATTERN = "%.4f"
COARSE_PATTERN = "%4.0f"


class PriceFormatSelector:
    """Currency prefix by quote suffix, precision by price magnitude."""

    @staticmethod
    def currency_prefix(symbol: str) -> str:
        for suffix, prefix in CURRENCY_PREFIXES:
            if symbol.endswith(suffix):
                return prefix
        return ""

    @staticmethod
    def decimal_pattern(last_price: float) -> str:
        # log10 is undefined for non-positive prices; those render with full precision
        if not math.isfinite(last_price) or last_price <= 0:
            return FINE_PATTERN
        if math.log10(last_price) <= 2:
            return FINE_PATTERN
        return COARSE_PATTERN

    @classmethod
    def select(cls, symbol: str, last_price: float) -> PriceFormat:
        return PriceFormat(
            currency_prefix=cls.currency_prefix(symbol),
            decimal_pattern=cls.decimal_pattern(last_price),
        )


__all__ = ["PriceFormatSelector", "CURRENCY_PREFIXES"]
