"""
Krypto Analysis Service

CONTRACT:
    Input:  asset id + quote currency, or a raw [[ts, price], ...] series
    Output: AnalysisResult

Combines the Indicator Engine, the Signal Composer and the optional
Narrative Annotator.
"""

from pricehub.services.analysis.service import AnalysisService, coerce_raw_prices

__all__ = [
    "AnalysisService",
    "coerce_raw_prices",
]
