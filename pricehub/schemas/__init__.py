"""
PriceHub Schema Contracts

JSON contracts between the resolver, the analyzer and the HTTP layer.
"""

from pricehub.schemas.market import (
    PricePoint,
    PriceSeries,
    ResolvedSpot,
    PriceResponse,
    CompareItem,
    CompareResponse,
)
from pricehub.schemas.analysis import (
    DISCLAIMER,
    MIN_RAW_POINTS,
    Signal,
    IndicatorSet,
    Prediction,
    AnalysisResult,
    RawAnalysisRequest,
)

__all__ = [
    # Market
    "PricePoint",
    "PriceSeries",
    "ResolvedSpot",
    "PriceResponse",
    "CompareItem",
    "CompareResponse",
    # Analysis
    "DISCLAIMER",
    "MIN_RAW_POINTS",
    "Signal",
    "IndicatorSet",
    "Prediction",
    "AnalysisResult",
    "RawAnalysisRequest",
]
