"""
Indicator Engine Service Implementation

Runs the fixed indicator battery over a price series.
NO I/O - Pure Python/NumPy calculations.
"""

import logging
from typing import Sequence

import numpy as np

from pricehub.schemas.analysis import IndicatorSet
from pricehub.services.indicators.calculations import (
    VOLATILITY_WINDOW,
    macd,
    rsi,
    sma,
    trend_slope,
    volatility,
)

logger = logging.getLogger(__name__)


class IndicatorService:
    """
    Indicator Engine.

    Stateless; periods are fixed at construction so every call on one
    instance is reproducible.
    """

    def __init__(
        self,
        sma_short: int = 20,
        sma_long: int = 50,
        rsi_period: int = 14,
        macd_fast: int = 12,
        macd_slow: int = 26,
        macd_signal: int = 9,
        slope_period: int = 30,
        volatility_window: int = VOLATILITY_WINDOW,
    ):
        self.sma_short = sma_short
        self.sma_long = sma_long
        self.rsi_period = rsi_period
        self.macd_fast = macd_fast
        self.macd_slow = macd_slow
        self.macd_signal = macd_signal
        self.slope_period = slope_period
        self.volatility_window = volatility_window

    @property
    def name(self) -> str:
        return "IndicatorService"

    def compute(self, prices: Sequence[float]) -> IndicatorSet:
        """Calculate all indicators for one price series (oldest first)."""
        closes = np.asarray(prices, dtype=float)
        if len(closes) == 0:
            raise ValueError("Cannot compute indicators on an empty series")

        macd_result = macd(closes, self.macd_fast, self.macd_slow, self.macd_signal)

        indicators = IndicatorSet(
            sma20=sma(closes, self.sma_short),
            sma50=sma(closes, self.sma_long),
            rsi14=rsi(closes, self.rsi_period),
            macd=macd_result.macd,
            macd_signal=macd_result.signal,
            macd_hist=macd_result.histogram,
            trend_slope=trend_slope(closes, self.slope_period),
            vol7=volatility(closes, self.volatility_window),
        )
        logger.debug(f"Indicators over {len(closes)} points: {indicators}")
        return indicators
