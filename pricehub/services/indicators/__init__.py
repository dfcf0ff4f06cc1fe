"""
Indicator Engine Service

CONTRACT:
    Input:  ordered price sequence (quote currency)
    Output: IndicatorSet

RESPONSIBILITIES:
    - Moving averages (SMA 20/50)
    - Momentum oscillator (RSI 14)
    - MACD 12/26/9
    - Scale-free trend slope
    - Log-return volatility

PURE PYTHON - No I/O.
Uses NumPy for calculations.
All math is deterministic and reproducible.
"""

from pricehub.services.indicators.service import IndicatorService

__all__ = [
    "IndicatorService",
]
