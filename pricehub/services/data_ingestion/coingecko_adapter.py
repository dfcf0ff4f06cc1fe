"""
CoinGecko Data Adapter

Last resort in the default chain: the free tier throttles hard, so every
call is preceded by a fixed pause. CoinGecko ids match ours directly.
"""

import asyncio
import logging
from typing import Any, Optional

from pricehub.schemas.market import PriceSeries
from pricehub.services.base import SourceError
from pricehub.services.data_ingestion.interface import PriceSource

logger = logging.getLogger(__name__)


class CoinGeckoSource(PriceSource):
    """CoinGecko v3 adapter."""

    @property
    def name(self) -> str:
        return "coingecko"

    @property
    def base_url(self) -> str:
        return self._settings.coingecko_base_url.rstrip("/")

    def _headers(self) -> dict[str, str]:
        headers = super()._headers()
        if self._settings.coingecko_api_key:
            headers["x-cg-demo-api-key"] = self._settings.coingecko_api_key
        return headers

    async def _get_json(self, url: str, params: Optional[dict] = None) -> Any:
        delay = self._settings.coingecko_delay_seconds
        if delay > 0:
            await asyncio.sleep(delay)
        return await super()._get_json(url, params)

    async def spot_price(self, asset_id: str) -> float:
        payload = await self._get_json(
            f"{self.base_url}/simple/price", {"ids": asset_id, "vs_currencies": "usd"}
        )
        entry = payload.get(asset_id) if isinstance(payload, dict) else None
        raw = entry.get("usd") if isinstance(entry, dict) else None
        return self._parse_price(raw, "simple_price")

    async def history_series(self, asset_id: str, days: int) -> PriceSeries:
        payload = await self._get_json(
            f"{self.base_url}/coins/{asset_id}/market_chart",
            {"vs_currency": "usd", "days": days},
        )
        prices = payload.get("prices") if isinstance(payload, dict) else None
        if not isinstance(prices, list):
            raise SourceError(self.name, "history_not_array")

        rows = [(p[0], p[1]) for p in prices if isinstance(p, list) and len(p) >= 2]
        return self._build_series(asset_id, days, rows)
