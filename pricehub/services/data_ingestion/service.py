"""
Market Data Service Implementation

Batch price and history lookups in the caller's quote currency.
Assets are resolved one at a time with a short pause in between; a failed
asset degrades to an error marker instead of failing the batch.
"""

import asyncio
import logging
from typing import Any

from pricehub.core.config import Settings
from pricehub.schemas.market import CompareItem, PriceSeries
from pricehub.services.base import AllSourcesExhausted, BaseService
from pricehub.services.cache import TTLCache
from pricehub.services.data_ingestion.resolver import PriceResolver
from pricehub.services.fx import CurrencyConverter

logger = logging.getLogger(__name__)

PRICE_UNAVAILABLE = "unavailable"
HISTORY_UNAVAILABLE = "history_unavailable"


class MarketDataService(BaseService):
    """
    Market Data Service.

    Wraps the resolver and the converter with response-level caching.
    """

    def __init__(
        self,
        resolver: PriceResolver,
        converter: CurrencyConverter,
        cache: TTLCache,
        settings: Settings,
    ):
        self._resolver = resolver
        self._converter = converter
        self._cache = cache
        self._settings = settings

    @property
    def name(self) -> str:
        return "MarketDataService"

    @property
    def resolver(self) -> PriceResolver:
        return self._resolver

    @property
    def converter(self) -> CurrencyConverter:
        return self._converter

    async def get_prices(
        self, ids: list[str], vs: str
    ) -> tuple[dict[str, dict[str, Any]], bool]:
        """
        Spot prices for ids in vs (plus usd).

        Returns:
            (data, cached) where data maps id → {vs: price, usd: price} or
            {error: "unavailable"}

        Raises:
            ConversionError: FX rate for vs unavailable
        """
        key = f"price:{','.join(ids)}:{vs}"
        hit = self._cache.get(key)
        if hit is not None:
            return hit, True

        rate = await self._converter.rate(vs)
        data: dict[str, dict[str, Any]] = {}

        for i, asset_id in enumerate(ids):
            if i > 0:
                await self._pause()
            try:
                spot = await self._resolver.resolve_spot(asset_id)
                data[asset_id] = {vs: spot.price * rate, "usd": spot.price}
            except AllSourcesExhausted as e:
                logger.warning(f"Price unavailable for {asset_id}: {e.message}")
                data[asset_id] = {"error": PRICE_UNAVAILABLE}

        self._cache.set(key, data, self._settings.price_ttl)
        return data, False

    async def compare(
        self, symbols: list[str], days: int, vs: str
    ) -> tuple[list[CompareItem], bool]:
        """
        History series for several assets in vs.

        Raises:
            ConversionError: FX rate for vs unavailable
        """
        key = f"cmp:{','.join(symbols)}:{days}:{vs}"
        hit = self._cache.get(key)
        if hit is not None:
            return hit, True

        rate = await self._converter.rate(vs)
        items: list[CompareItem] = []

        for i, asset_id in enumerate(symbols):
            if i > 0:
                await self._pause()
            try:
                series = await self._resolver.resolve_history(asset_id, days)
                items.append(
                    CompareItem(id=asset_id, prices=series.scaled(rate, vs).as_pairs())
                )
            except AllSourcesExhausted as e:
                logger.warning(f"History unavailable for {asset_id}: {e.message}")
                items.append(CompareItem(id=asset_id, error=HISTORY_UNAVAILABLE, prices=[]))

        self._cache.set(key, items, self._settings.compare_ttl)
        return items, False

    async def get_history(self, asset_id: str, days: int, vs: str) -> PriceSeries:
        """
        One asset's history converted to vs.

        Raises:
            ConversionError: FX rate for vs unavailable
            AllSourcesExhausted: no provider served the series
        """
        rate = await self._converter.rate(vs)
        series = await self._resolver.resolve_history(asset_id, days)
        return series.scaled(rate, vs)

    async def health_check(self) -> bool:
        """Healthy if any source in the chain answers."""
        for source in self._resolver.sources:
            if await source.health_check():
                return True
        return False

    async def close(self) -> None:
        await self._resolver.close()
        await self._converter.close()

    async def _pause(self) -> None:
        delay = self._settings.batch_delay_seconds
        if delay > 0:
            await asyncio.sleep(delay)
