"""
Service Container

Builds every long-lived service once at start-up around a single TTL cache
instance, and tears the HTTP sessions down at shutdown.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from pricehub.core.config import Settings
from pricehub.services.analysis import AnalysisService
from pricehub.services.cache import TTLCache
from pricehub.services.data_ingestion import MarketDataService, PriceResolver, build_sources
from pricehub.services.fx import CurrencyConverter
from pricehub.services.indicators import IndicatorService
from pricehub.services.llm import LLMClient, LLMConfig, NarrativeAnnotator, build_annotator

logger = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    """Everything the HTTP layer needs."""

    settings: Settings
    cache: TTLCache
    market: MarketDataService
    analysis: AnalysisService
    annotator: Optional[NarrativeAnnotator] = None

    async def close(self) -> None:
        await self.market.close()


def build_services(settings: Settings, cache: Optional[TTLCache] = None) -> ServiceContainer:
    """Wire cache → converter/adapters → resolver → market → analysis."""
    cache = cache or TTLCache()

    converter = CurrencyConverter(settings, cache)
    resolver = PriceResolver(build_sources(settings, cache))
    market = MarketDataService(resolver, converter, cache, settings)

    annotator = None
    if settings.narrative_enabled:
        annotator = build_annotator(LLMClient(LLMConfig.from_settings(settings)))

    analysis = AnalysisService(
        market,
        IndicatorService(),
        annotator,
        analyze_days=settings.analyze_days,
    )

    logger.info(
        f"Price sources: {' → '.join(s.name for s in resolver.sources)}; "
        f"narrative {'on' if annotator else 'off'}"
    )
    return ServiceContainer(
        settings=settings,
        cache=cache,
        market=market,
        analysis=analysis,
        annotator=annotator,
    )
