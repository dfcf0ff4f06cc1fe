"""
In-process TTL cache.

Absorbs upstream rate limits and transient failures for prices, FX rates and
resolved provider ids. Volatile by nature: nothing here is ever needed for
correctness, only for latency.

Keys:
- price:{ids}:{vs}          → /api/price payload
- cmp:{symbols}:{days}:{vs} → /api/compare payload
- fx:{vs}                   → float (USD → vs rate)
- pair:{id}                 → Binance pair or False
- coincap:id:{id}           → CoinCap asset id
- paprika:id:{id}           → CoinPaprika currency id
"""

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)


# Per data-type TTL (seconds)
TTL = {
    "price": 60,               # spot payloads
    "compare": 5 * 60,         # history payloads
    "fx": 5 * 60,              # FX moves far slower than crypto spot
    "resolve": 24 * 3600,      # id → instrument mappings are effectively static
}


@dataclass
class CacheEntry:
    """Stored value with its creation time and lifetime."""

    value: Any
    created_at: float
    ttl: float

    def is_valid(self, now: float) -> bool:
        return now - self.created_at < self.ttl


class TTLCache:
    """
    Keyed ephemeral store with lazy expiry.

    No size bound and no sweep: expired entries are simply ignored on read
    and overwritten on the next successful set.
    """

    def __init__(self, clock: Optional[Callable[[], float]] = None):
        self._clock = clock or time.monotonic
        self._entries: dict[str, CacheEntry] = {}

    def set(self, key: str, value: Any, ttl: float) -> None:
        """Store value under key. Last writer wins."""
        self._entries[key] = CacheEntry(value=value, created_at=self._clock(), ttl=ttl)

    def get(self, key: str) -> Optional[Any]:
        """
        Get a live value, or None if the key is missing or expired.

        Stored falsy values (False, 0, empty list) come back unchanged.
        """
        entry = self._entries.get(key)
        if entry is None:
            return None
        if not entry.is_valid(self._clock()):
            return None
        logger.debug(f"Cache hit: {key}")
        return entry.value

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None

    def __len__(self) -> int:
        return len(self._entries)
