"""
CoinCap Data Adapter

CoinCap ids mostly match ours, but not always; unknown ids go through a
free-text search. The resolved id is cached for a day.
"""

import logging
from typing import Optional

from pricehub.schemas.market import PriceSeries
from pricehub.services.base import SourceError
from pricehub.services.data_ingestion.interface import PriceSource, cutoff_ms

logger = logging.getLogger(__name__)


class CoinCapSource(PriceSource):
    """CoinCap REST adapter."""

    @property
    def name(self) -> str:
        return "coincap"

    @property
    def base_url(self) -> str:
        return self._settings.coincap_base_url.rstrip("/")

    def _headers(self) -> dict[str, str]:
        headers = super()._headers()
        if self._settings.coincap_api_key:
            headers["Authorization"] = f"Bearer {self._settings.coincap_api_key}"
        return headers

    async def spot_price(self, asset_id: str) -> float:
        coincap_id = await self._resolve_id(asset_id)
        payload = await self._get_json(f"{self.base_url}/assets/{coincap_id}")
        data = payload.get("data") if isinstance(payload, dict) else None
        raw = data.get("priceUsd") if isinstance(data, dict) else None
        return self._parse_price(raw, "price_usd")

    async def history_series(self, asset_id: str, days: int) -> PriceSeries:
        coincap_id = await self._resolve_id(asset_id)
        interval = "h1" if days <= 30 else "d1"
        payload = await self._get_json(
            f"{self.base_url}/assets/{coincap_id}/history", {"interval": interval}
        )
        data = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(data, list):
            raise SourceError(self.name, "history_not_array")

        rows = [(p.get("time"), p.get("priceUsd")) for p in data if isinstance(p, dict)]
        return self._build_series(asset_id, days, rows, since_ms=cutoff_ms(days))

    async def _resolve_id(self, asset_id: str) -> str:
        """Direct lookup first, then search. Cached for resolve_ttl."""
        key = f"coincap:id:{asset_id}"
        hit = self._cache.get(key)
        if hit is not None:
            return hit

        resolved = await self._lookup_direct(asset_id) or await self._lookup_search(asset_id)
        if not resolved:
            raise SourceError(self.name, "resolve_failed", {"asset_id": asset_id})

        if resolved != asset_id:
            logger.debug(f"CoinCap resolved {asset_id} → {resolved}")
        self._cache.set(key, resolved, self._settings.resolve_ttl)
        return resolved

    async def _lookup_direct(self, asset_id: str) -> Optional[str]:
        try:
            payload = await self._get_json(f"{self.base_url}/assets/{asset_id}")
        except SourceError:
            return None
        data = payload.get("data") if isinstance(payload, dict) else None
        return data.get("id") if isinstance(data, dict) else None

    async def _lookup_search(self, asset_id: str) -> Optional[str]:
        try:
            payload = await self._get_json(f"{self.base_url}/assets", {"search": asset_id})
        except SourceError:
            return None
        data = payload.get("data") if isinstance(payload, dict) else None
        if isinstance(data, list) and data and isinstance(data[0], dict):
            return data[0].get("id")
        return None
