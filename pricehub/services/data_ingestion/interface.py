"""
Source Adapter Interface

Every upstream provider implements the same two capabilities and hides its
own response shapes, id schemes and rate-limit quirks behind them:

    spot_price(asset_id)            → float (reference currency)
    history_series(asset_id, days)  → PriceSeries (reference currency)

Any failure surfaces as SourceError so the resolver can fall through to the
next provider.
"""

import asyncio
import logging
import math
import time
from abc import abstractmethod
from typing import Any, Iterable, Optional

import aiohttp

from pricehub.core.config import Settings
from pricehub.schemas.market import PricePoint, PriceSeries
from pricehub.services.base import BaseService, SourceError
from pricehub.services.cache import TTLCache

logger = logging.getLogger(__name__)

DAY_MS = 24 * 3600 * 1000


def now_ms() -> int:
    return int(time.time() * 1000)


def cutoff_ms(days: int) -> int:
    """Oldest timestamp that still falls inside a `days` lookback window."""
    return now_ms() - days * DAY_MS


class PriceSource(BaseService):
    """
    Base class for upstream market-data adapters.

    Owns one lazily created aiohttp session with a hard per-call timeout.
    """

    def __init__(self, settings: Settings, cache: TTLCache):
        self._settings = settings
        self._cache = cache
        self._session: Optional[aiohttp.ClientSession] = None

    @property
    @abstractmethod
    def name(self) -> str:
        pass

    @abstractmethod
    async def spot_price(self, asset_id: str) -> float:
        """Current price of asset_id in the reference currency."""
        pass

    @abstractmethod
    async def history_series(self, asset_id: str, days: int) -> PriceSeries:
        """Close series of asset_id over the last `days` days."""
        pass

    async def health_check(self) -> bool:
        try:
            await self.spot_price("bitcoin")
            return True
        except SourceError as e:
            logger.warning(f"{self.name} health check failed: {e.reason}")
            return False

    # ------------------------------------------------------------------ #
    # HTTP
    # ------------------------------------------------------------------ #

    def _headers(self) -> dict[str, str]:
        return {"Accept": "application/json"}

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Ensure we have an active HTTP session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self._settings.http_timeout_seconds),
                headers=self._headers(),
            )
        return self._session

    async def _get_json(self, url: str, params: Optional[dict] = None) -> Any:
        """
        GET url and decode JSON.

        Raises:
            SourceError: non-200 status, timeout, connection or decode error
        """
        session = await self._ensure_session()
        try:
            async with session.get(url, params=params) as resp:
                if resp.status != 200:
                    raise SourceError(self.name, f"http_{resp.status}", {"url": url})
                return await resp.json(content_type=None)
        except asyncio.TimeoutError as e:
            raise SourceError(self.name, "timeout", {"url": url}) from e
        except (aiohttp.ClientError, ValueError) as e:
            raise SourceError(self.name, f"request_failed: {e}", {"url": url}) from e

    async def close(self) -> None:
        """Close the HTTP session."""
        if self._session and not self._session.closed:
            await self._session.close()

    # ------------------------------------------------------------------ #
    # Parsing
    # ------------------------------------------------------------------ #

    def _parse_price(self, raw: Any, field: str) -> float:
        """Parse one numeric field; must be finite and positive."""
        if raw is None:
            raise SourceError(self.name, f"{field}_missing")
        try:
            price = float(raw)
        except (TypeError, ValueError, OverflowError):
            raise SourceError(self.name, f"{field}_nan")
        if not math.isfinite(price) or price <= 0:
            raise SourceError(self.name, f"{field}_invalid")
        return price

    def _build_series(
        self,
        asset_id: str,
        days: int,
        rows: Iterable[tuple[Any, Any]],
        since_ms: Optional[int] = None,
    ) -> PriceSeries:
        """
        Normalize (timestamp, price) rows into a canonical PriceSeries.

        Drops rows with a bad timestamp or a non-finite/non-positive price,
        drops rows older than since_ms, sorts by timestamp.
        """
        points = []
        for ts, raw_price in rows:
            try:
                timestamp = int(ts)
                price = float(raw_price)
            except (TypeError, ValueError, OverflowError):
                continue
            if not math.isfinite(price) or price <= 0:
                continue
            if since_ms is not None and timestamp < since_ms:
                continue
            points.append(PricePoint(timestamp=timestamp, price=price))

        if not points:
            raise SourceError(self.name, "history_empty", {"asset_id": asset_id})

        points.sort(key=lambda p: p.timestamp)
        return PriceSeries(
            asset_id=asset_id,
            currency=self._settings.reference_currency,
            days=days,
            source=self.name,
            points=points,
        )
