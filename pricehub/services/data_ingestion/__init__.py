"""
Price Resolution Layer

CONTRACT:
    Input:  asset id (+ lookback days)
    Output: spot price or canonical PriceSeries in the reference currency

RESPONSIBILITIES:
    - One adapter per upstream provider (Binance, CoinCap, CoinPaprika, CoinGecko)
    - Normalize provider shapes into PriceSeries
    - Ordered first-success fallback across adapters
    - Cache resolved ids and payloads to absorb rate limits

NO INDICATOR MATH - Pure data fetching and transformation.
"""

from pricehub.services.data_ingestion.interface import PriceSource
from pricehub.services.data_ingestion.resolver import (
    PriceResolver,
    first_success,
    build_sources,
    SOURCE_REGISTRY,
)
from pricehub.services.data_ingestion.service import MarketDataService

__all__ = [
    "PriceSource",
    "PriceResolver",
    "first_success",
    "build_sources",
    "SOURCE_REGISTRY",
    "MarketDataService",
]
