"""
Cache module for PriceHub.

Provides the in-process TTL cache shared by the resolver, the adapters and
the currency converter.
"""

from pricehub.services.cache.ttl_cache import TTL, CacheEntry, TTLCache

__all__ = [
    "TTL",
    "CacheEntry",
    "TTLCache",
]
