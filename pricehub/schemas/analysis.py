"""
CONTRACT 2: Krypto Analyzer

Input: price series already expressed in the quote currency
Output: AnalysisResult

Indicator keys keep their historical camel-case names on the wire.
"""

from enum import Enum
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field

DISCLAIMER = "Educational use only. This is NOT financial advice."
MIN_RAW_POINTS = 40


class Signal(str, Enum):
    BULLISH = "bullish"
    BEARISH = "bearish"
    NEUTRAL = "neutral"


class IndicatorSet(BaseModel):
    """
    Technical indicators for one analysis call.

    None means "not enough data" for that indicator.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    sma20: Optional[float] = None
    sma50: Optional[float] = None
    rsi14: Optional[float] = None
    macd: Optional[float] = None
    macd_signal: Optional[float] = Field(default=None, alias="macdSignal")
    macd_hist: Optional[float] = Field(default=None, alias="macdHist")
    trend_slope: float = Field(default=0.0, alias="trendSlope")
    vol7: Optional[float] = None


class Prediction(BaseModel):
    """24-hour price band around the latest price."""

    model_config = ConfigDict(frozen=True)

    horizon_hours: int = 24
    band_abs: tuple[float, float]
    band_pct: tuple[float, float]


class AnalysisResult(BaseModel):
    """Externally visible analysis record. One instance per request."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    ok: bool = True
    symbol: str
    vs: str
    latest_price: float
    indicators: IndicatorSet
    signal: Signal
    confidence: float = Field(..., ge=0.1, le=0.95)
    prediction: Prediction
    summary: str
    disclaimer: str = DISCLAIMER
    krypto_summary: Optional[str] = None

    def to_response(self) -> dict[str, Any]:
        """JSON body; krypto_summary only appears when a narrative ran."""
        body = self.model_dump(mode="json", by_alias=True)
        if body.get("krypto_summary") is None:
            body.pop("krypto_summary", None)
        return body


class RawAnalysisRequest(BaseModel):
    """
    POST /api/krypto/analyze/raw body.

    prices rows are [ts, price] pairs or bare numbers; anything that is not
    a finite positive number is dropped before analysis.
    """

    symbol: str = "bitcoin"
    vs: str = "inr"
    prices: Optional[list[Any]] = None
