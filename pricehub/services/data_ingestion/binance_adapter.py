"""
Binance Data Adapter

USDT-quoted spot tickers and klines. USDT is treated as USD for majors.
Only seeded coins are supported; each pair is probed once and the outcome
cached for a day.
"""

import logging

from pricehub.schemas.market import PriceSeries
from pricehub.services.base import SourceError
from pricehub.services.data_ingestion.coins import guess_binance_pair
from pricehub.services.data_ingestion.interface import PriceSource, cutoff_ms

logger = logging.getLogger(__name__)

# Binance caps klines per call
MAX_KLINES = 1000


def kline_interval(days: int) -> str:
    """Finer candles for shorter windows so 1000 candles still cover them."""
    if days <= 7:
        return "30m"
    if days <= 30:
        return "1h"
    return "4h"


class BinanceSource(PriceSource):
    """Binance public REST adapter."""

    @property
    def name(self) -> str:
        return "binance"

    @property
    def base_url(self) -> str:
        return self._settings.binance_base_url.rstrip("/")

    async def spot_price(self, asset_id: str) -> float:
        pair = await self._resolve_pair(asset_id)
        return await self._ticker_price(pair)

    async def history_series(self, asset_id: str, days: int) -> PriceSeries:
        pair = await self._resolve_pair(asset_id)
        klines = await self._get_json(
            f"{self.base_url}/api/v3/klines",
            {"symbol": pair, "interval": kline_interval(days), "limit": MAX_KLINES},
        )
        if not isinstance(klines, list):
            raise SourceError(self.name, "klines_not_array")

        # Kline format: [openTime, open, high, low, close, volume, closeTime, ...]
        rows = [(k[0], k[4]) for k in klines if isinstance(k, list) and len(k) > 4]
        return self._build_series(asset_id, days, rows, since_ms=cutoff_ms(days))

    async def _ticker_price(self, pair: str) -> float:
        payload = await self._get_json(
            f"{self.base_url}/api/v3/ticker/price", {"symbol": pair}
        )
        raw = payload.get("price") if isinstance(payload, dict) else None
        return self._parse_price(raw, "ticker_price")

    async def _resolve_pair(self, asset_id: str) -> str:
        """
        Map an asset id to a tradeable USDT pair.

        Both outcomes are cached: the pair on success, False when the coin is
        unknown or the probe failed.
        """
        key = f"pair:{asset_id}"
        hit = self._cache.get(key)
        if hit is not None:
            if hit is False:
                raise SourceError(self.name, "pair_unavailable", {"asset_id": asset_id})
            return hit

        ttl = self._settings.resolve_ttl
        guess = guess_binance_pair(asset_id)
        if guess is None:
            self._cache.set(key, False, ttl)
            raise SourceError(self.name, "pair_unknown", {"asset_id": asset_id})

        try:
            await self._ticker_price(guess)
        except SourceError:
            logger.info(f"Binance pair probe failed for {asset_id} ({guess})")
            self._cache.set(key, False, ttl)
            raise

        self._cache.set(key, guess, ttl)
        return guess
