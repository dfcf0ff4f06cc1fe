"""
CoinPaprika Data Adapter

Paprika ids look like "btc-bitcoin", so every asset goes through search.
The resolved id is cached for a day.
"""

import logging
import re
from datetime import datetime, timedelta, timezone

from pricehub.schemas.market import PriceSeries
from pricehub.services.base import SourceError
from pricehub.services.data_ingestion.interface import PriceSource, cutoff_ms

logger = logging.getLogger(__name__)


def to_epoch_ms(value: str) -> int:
    """ISO-8601 timestamp (Z suffix allowed) → epoch milliseconds."""
    ts = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return int(ts.timestamp() * 1000)


class CoinPaprikaSource(PriceSource):
    """CoinPaprika REST adapter."""

    @property
    def name(self) -> str:
        return "coinpaprika"

    @property
    def base_url(self) -> str:
        return self._settings.coinpaprika_base_url.rstrip("/")

    async def spot_price(self, asset_id: str) -> float:
        paprika_id = await self._resolve_id(asset_id)
        payload = await self._get_json(f"{self.base_url}/tickers/{paprika_id}")
        quotes = payload.get("quotes") if isinstance(payload, dict) else None
        usd = quotes.get("USD") if isinstance(quotes, dict) else None
        raw = usd.get("price") if isinstance(usd, dict) else None
        return self._parse_price(raw, "quote_usd")

    async def history_series(self, asset_id: str, days: int) -> PriceSeries:
        paprika_id = await self._resolve_id(asset_id)
        start = datetime.now(timezone.utc) - timedelta(days=days)
        payload = await self._get_json(
            f"{self.base_url}/tickers/{paprika_id}/historical",
            {
                "start": start.strftime("%Y-%m-%dT%H:%M:%SZ"),
                "interval": "1h" if days <= 30 else "1d",
            },
        )
        if not isinstance(payload, list):
            raise SourceError(self.name, "history_not_array")

        rows = []
        for p in payload:
            if not isinstance(p, dict) or not isinstance(p.get("timestamp"), str):
                continue
            try:
                rows.append((to_epoch_ms(p["timestamp"]), p.get("price")))
            except ValueError:
                continue
        return self._build_series(asset_id, days, rows, since_ms=cutoff_ms(days))

    async def _resolve_id(self, asset_id: str) -> str:
        key = f"paprika:id:{asset_id}"
        hit = self._cache.get(key)
        if hit is not None:
            return hit

        query = re.sub(r"[^a-z0-9]+", " ", asset_id, flags=re.IGNORECASE).strip()
        payload = await self._get_json(
            f"{self.base_url}/search", {"q": query, "c": "currencies", "limit": 5}
        )
        currencies = payload.get("currencies") if isinstance(payload, dict) else None
        resolved = None
        if isinstance(currencies, list) and currencies and isinstance(currencies[0], dict):
            resolved = currencies[0].get("id")
        if not resolved:
            raise SourceError(self.name, "resolve_failed", {"asset_id": asset_id})

        self._cache.set(key, resolved, self._settings.resolve_ttl)
        return resolved
