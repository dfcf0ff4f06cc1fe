"""
Signal Composer

Hand-tuned scoring rule, not a statistical model. Turns an IndicatorSet and
the latest price into a direction, a confidence and a 24h price band.

    score  = ±1 (SMA20 vs SMA50) ±1 (MACD vs signal) ±1/0 (RSI 60/40 bands)
             + 50 × trend slope
    norm   = clamp(score, -3, 3) / 3
    signal = bullish > 0.25, bearish < -0.25, else neutral
    conf   = clamp(0.5 - 2·vol + 0.5·|norm|, 0.1, 0.95)
    move   = clamp(1.2·vol, 0.4%, 5%)      (vol falls back to 1%)
    drift  = norm × 1.2%
    band   = [drift - move, drift + move]
"""

from dataclasses import dataclass
from typing import Optional

from pricehub.schemas.analysis import IndicatorSet, Prediction, Signal

RSI_BULLISH = 60
RSI_BEARISH = 40
SLOPE_WEIGHT = 50
SCORE_LIMIT = 3
SIGNAL_THRESHOLD = 0.25

CONFIDENCE_BASE = 0.5
CONFIDENCE_MIN = 0.1
CONFIDENCE_MAX = 0.95

MOVE_VOL_MULTIPLIER = 1.2
MOVE_MIN = 0.004
MOVE_MAX = 0.05
FALLBACK_VOLATILITY = 0.01
DRIFT_SCALE = 0.012
HORIZON_HOURS = 24


@dataclass(frozen=True)
class SignalOutcome:
    """Composer output for one analysis call."""

    score: float
    norm_score: float
    signal: Signal
    confidence: float
    prediction: Prediction


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _above(a: Optional[float], b: Optional[float]) -> bool:
    """a > b; an undefined side never counts as above."""
    return a is not None and b is not None and a > b


def score_indicators(indicators: IndicatorSet) -> float:
    """Raw, unclamped score."""
    score = 0.0
    score += 1 if _above(indicators.sma20, indicators.sma50) else -1
    score += 1 if _above(indicators.macd, indicators.macd_signal) else -1

    if indicators.rsi14 is not None:
        if indicators.rsi14 > RSI_BULLISH:
            score += 1
        elif indicators.rsi14 < RSI_BEARISH:
            score -= 1

    score += indicators.trend_slope * SLOPE_WEIGHT
    return score


def classify(norm_score: float) -> Signal:
    if norm_score > SIGNAL_THRESHOLD:
        return Signal.BULLISH
    if norm_score < -SIGNAL_THRESHOLD:
        return Signal.BEARISH
    return Signal.NEUTRAL


def compose_signal(indicators: IndicatorSet, latest_price: float) -> SignalOutcome:
    """Combine indicators into signal, confidence and predicted band."""
    score = score_indicators(indicators)
    norm = clamp(score, -SCORE_LIMIT, SCORE_LIMIT) / SCORE_LIMIT

    # Zero volatility is treated like missing volatility here.
    vol = indicators.vol7
    confidence = clamp(
        CONFIDENCE_BASE - (vol or 0.0) * 2 + abs(norm) * 0.5,
        CONFIDENCE_MIN,
        CONFIDENCE_MAX,
    )

    expected_move = clamp((vol or FALLBACK_VOLATILITY) * MOVE_VOL_MULTIPLIER, MOVE_MIN, MOVE_MAX)
    drift = norm * DRIFT_SCALE
    low_pct, high_pct = drift - expected_move, drift + expected_move

    prediction = Prediction(
        horizon_hours=HORIZON_HOURS,
        band_abs=(latest_price * (1 + low_pct), latest_price * (1 + high_pct)),
        band_pct=(low_pct, high_pct),
    )
    return SignalOutcome(
        score=score,
        norm_score=norm,
        signal=classify(norm),
        confidence=confidence,
        prediction=prediction,
    )
