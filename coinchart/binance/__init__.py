"""Binance market data."""

from .rest_client import BinanceRestClient

__all__ = ["BinanceRestClient"]
