"""
Krypto Analyzer

price series → IndicatorSet → SignalOutcome → AnalysisResult
(→ optional narrative)

Two entry points: analyze_symbol resolves the series through the fallback
chain; analyze_raw takes a caller-supplied series and never touches the
network.
"""

import logging
import math
from typing import Any, Optional, Sequence

from pricehub.schemas.analysis import (
    DISCLAIMER,
    MIN_RAW_POINTS,
    AnalysisResult,
    IndicatorSet,
)
from pricehub.services.base import ValidationError
from pricehub.services.data_ingestion.service import MarketDataService
from pricehub.services.indicators import IndicatorService
from pricehub.services.llm.narrative import NarrativeAnnotator
from pricehub.services.signals import compose_signal

logger = logging.getLogger(__name__)


def coerce_raw_prices(rows: Sequence[Any]) -> list[float]:
    """
    [[ts, price], ...] or [price, ...] → finite positive prices.

    Rows that cannot be read as a number are dropped.
    """
    prices = []
    for row in rows:
        value = row[1] if isinstance(row, (list, tuple)) and len(row) > 1 else row
        if isinstance(value, bool):
            continue
        try:
            price = float(value)
        except (TypeError, ValueError, OverflowError):
            continue
        if math.isfinite(price) and price > 0:
            prices.append(price)
    return prices


class AnalysisService:
    """Krypto analysis over resolved or caller-supplied prices."""

    def __init__(
        self,
        market: Optional[MarketDataService],
        indicators: Optional[IndicatorService] = None,
        annotator: Optional[NarrativeAnnotator] = None,
        analyze_days: int = 60,
    ):
        self._market = market
        self._indicators = indicators or IndicatorService()
        self._annotator = annotator
        self._analyze_days = analyze_days

    @property
    def name(self) -> str:
        return "AnalysisService"

    async def analyze_symbol(
        self, symbol: str, vs: str, days: Optional[int] = None
    ) -> AnalysisResult:
        """
        Resolve, convert, score and (optionally) narrate one asset.

        Raises:
            ConversionError: FX rate unavailable
            AllSourcesExhausted: no provider served the history
        """
        if self._market is None:
            raise RuntimeError("AnalysisService has no market data service")

        series = await self._market.get_history(symbol, days or self._analyze_days, vs)
        logger.info(
            f"Analyzing {symbol}/{vs}: {len(series.points)} points from {series.source}"
        )
        result = self.build_result(symbol, vs, series.prices())

        if self._annotator is not None:
            result = await self._annotator.annotate(result)
        return result

    def analyze_raw(self, symbol: str, vs: str, rows: Optional[Sequence[Any]]) -> AnalysisResult:
        """
        Score a caller-supplied series. No resolver, no FX, no narrative.

        Raises:
            ValidationError: fewer than 40 rows, or no usable prices
        """
        if not isinstance(rows, (list, tuple)) or len(rows) < MIN_RAW_POINTS:
            raise ValidationError(f"prices array required (>={MIN_RAW_POINTS} points)")

        prices = coerce_raw_prices(rows)
        if not prices:
            raise ValidationError("invalid prices")

        return self.build_result(symbol, vs, prices)

    def build_result(self, symbol: str, vs: str, prices: Sequence[float]) -> AnalysisResult:
        """Pure numeric pipeline shared by both entry points."""
        latest = float(prices[-1])
        indicators: IndicatorSet = self._indicators.compute(prices)
        outcome = compose_signal(indicators, latest)

        return AnalysisResult(
            symbol=symbol,
            vs=vs,
            latest_price=latest,
            indicators=indicators,
            signal=outcome.signal,
            confidence=outcome.confidence,
            prediction=outcome.prediction,
            summary=f"Signal: {outcome.signal.value}, Confidence {outcome.confidence * 100:.0f}%",
            disclaimer=DISCLAIMER,
        )
