"""
Price Resolver

Walks a fixed, ordered fallback chain of Source Adapters and returns the
first success. Sequential on purpose: a fully exhausted chain costs the sum
of the adapters' timeouts, and no provider is hit unless every provider
before it failed.
"""

import logging
from typing import Awaitable, Callable, Iterable, Sequence, TypeVar

from pricehub.core.config import Settings
from pricehub.schemas.market import PriceSeries, ResolvedSpot
from pricehub.services.base import AllSourcesExhausted, SourceError
from pricehub.services.cache import TTLCache
from pricehub.services.data_ingestion.binance_adapter import BinanceSource
from pricehub.services.data_ingestion.coincap_adapter import CoinCapSource
from pricehub.services.data_ingestion.coingecko_adapter import CoinGeckoSource
from pricehub.services.data_ingestion.interface import PriceSource
from pricehub.services.data_ingestion.paprika_adapter import CoinPaprikaSource

logger = logging.getLogger(__name__)

T = TypeVar("T")

SOURCE_REGISTRY: dict[str, type[PriceSource]] = {
    "binance": BinanceSource,
    "coincap": CoinCapSource,
    "coinpaprika": CoinPaprikaSource,
    "coingecko": CoinGeckoSource,
}


async def first_success(
    sources: Iterable[PriceSource],
    call: Callable[[PriceSource], Awaitable[T]],
    asset_id: str,
    capability: str = "price",
) -> tuple[PriceSource, T]:
    """
    Await call(source) for each source in order; return the first result.

    SourceError moves on to the next source. Anything else propagates.
    Sources after the first success are never invoked.

    Raises:
        AllSourcesExhausted: every source raised SourceError
    """
    failures: dict[str, str] = {}
    for source in sources:
        try:
            result = await call(source)
        except SourceError as e:
            logger.warning(f"{source.name} failed {capability} for {asset_id}: {e.reason}")
            failures[source.name] = e.reason
            continue
        return source, result

    raise AllSourcesExhausted(asset_id, capability, {"failures": failures})


class PriceResolver:
    """Provider-agnostic spot/history resolution over an ordered chain."""

    def __init__(self, sources: Sequence[PriceSource]):
        if not sources:
            raise ValueError("PriceResolver needs at least one source")
        self._sources = tuple(sources)

    @property
    def sources(self) -> tuple[PriceSource, ...]:
        return self._sources

    async def resolve_spot(self, asset_id: str) -> ResolvedSpot:
        source, price = await first_success(
            self._sources, lambda s: s.spot_price(asset_id), asset_id, "price"
        )
        return ResolvedSpot(asset_id=asset_id, price=price, source=source.name)

    async def resolve_history(self, asset_id: str, days: int) -> PriceSeries:
        _, series = await first_success(
            self._sources, lambda s: s.history_series(asset_id, days), asset_id, "history"
        )
        logger.debug(f"History for {asset_id} ({days}d) served by {series.source}")
        return series

    async def close(self) -> None:
        for source in self._sources:
            await source.close()


def build_sources(settings: Settings, cache: TTLCache) -> list[PriceSource]:
    """Instantiate adapters in the configured order."""
    sources = []
    for name in settings.price_sources:
        source_cls = SOURCE_REGISTRY.get(name.lower())
        if source_cls is None:
            raise ValueError(
                f"Unknown price source '{name}'. Options: {', '.join(SOURCE_REGISTRY)}"
            )
        sources.append(source_cls(settings, cache))
    return sources
