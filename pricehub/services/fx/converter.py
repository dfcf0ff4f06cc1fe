"""
Currency Converter

Resolves the USD → quote-currency spot rate. Rates are cached well beyond
price TTLs since FX barely moves within minutes.
"""

import asyncio
import logging
import math
from typing import Optional

import aiohttp

from pricehub.core.config import Settings
from pricehub.services.base import ConversionError
from pricehub.services.cache import TTLCache

logger = logging.getLogger(__name__)


class CurrencyConverter:
    """USD-based FX conversion backed by the shared TTL cache."""

    def __init__(self, settings: Settings, cache: TTLCache):
        self._settings = settings
        self._cache = cache
        self._session: Optional[aiohttp.ClientSession] = None

    @property
    def reference_currency(self) -> str:
        return self._settings.reference_currency.lower()

    def is_reference(self, quote: Optional[str]) -> bool:
        return not quote or quote.lower() == self.reference_currency

    async def rate(self, quote: Optional[str]) -> float:
        """
        Get the multiplier from the reference currency to quote.

        Raises:
            ConversionError: rate missing, non-numeric or non-finite
        """
        if self.is_reference(quote):
            return 1.0

        quote = quote.lower()
        key = f"fx:{quote}"
        hit = self._cache.get(key)
        if hit is not None:
            return hit

        rate = await self._fetch_rate(quote)
        self._cache.set(key, rate, self._settings.fx_ttl)
        logger.info(f"FX rate USD→{quote.upper()}: {rate}")
        return rate

    async def convert(self, amount_ref: float, quote: Optional[str]) -> float:
        """Convert an amount in the reference currency to quote."""
        return amount_ref * await self.rate(quote)

    async def _fetch_rate(self, quote: str) -> float:
        symbol = quote.upper()
        params = {"base": self.reference_currency.upper(), "symbols": symbol}
        if self._settings.fx_api_key:
            params["access_key"] = self._settings.fx_api_key

        payload = await self._get_json(self._settings.fx_base_url, params)

        raw = (payload.get("rates") or {}).get(symbol) if isinstance(payload, dict) else None
        try:
            rate = float(raw)
        except (TypeError, ValueError, OverflowError):
            raise ConversionError(quote, "fx_rate_missing")

        if not math.isfinite(rate) or rate <= 0:
            raise ConversionError(quote, "fx_rate_invalid")
        return rate

    async def _get_json(self, url: str, params: dict) -> dict:
        session = await self._ensure_session()
        try:
            async with session.get(url, params=params) as resp:
                if resp.status != 200:
                    raise ConversionError(params["symbols"].lower(), f"fx_http_{resp.status}")
                return await resp.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            logger.warning(f"FX lookup failed: {e}")
            raise ConversionError(params["symbols"].lower(), "fx_failed") from e

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Ensure we have an active HTTP session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self._settings.http_timeout_seconds),
                headers={"Accept": "application/json"},
            )
        return self._session

    async def close(self) -> None:
        if self._session and not self._session.closed:
            await self._session.close()
