"""
Technical Indicator Calculations

Pure NumPy implementations of the Krypto indicator battery.
NO I/O - All math is deterministic.

Every function takes an ordered sequence of prices (oldest first) and returns
None where the series is too short for the indicator to exist.
"""

from dataclasses import dataclass
from typing import Optional, Sequence, Union

import numpy as np

PriceInput = Union[Sequence[float], np.ndarray]

# Division guard for loss sums and window means
EPSILON = 1e-9

# 7 days of hourly samples. A sample count, not a time span.
VOLATILITY_WINDOW = 24 * 7


@dataclass(frozen=True)
class MACDResult:
    """Latest MACD line, signal line and histogram."""

    macd: Optional[float]
    signal: Optional[float]
    histogram: Optional[float]


def _as_array(prices: PriceInput) -> np.ndarray:
    return np.asarray(prices, dtype=float)


# =============================================================================
# MOVING AVERAGES
# =============================================================================


def sma(prices: PriceInput, period: int) -> Optional[float]:
    """Simple Moving Average of the last `period` prices."""
    data = _as_array(prices)
    if period <= 0 or len(data) < period:
        return None
    return float(np.mean(data[-period:]))


def ema_series(prices: PriceInput, period: int) -> np.ndarray:
    """
    Exponential Moving Average series.

    Seeded with the mean of the first `period` prices, then advanced from
    index period-1 onward with k = 2/(period+1). One value per index from
    period-1, so the result has len(prices) - period + 1 entries.
    """
    data = _as_array(prices)
    if len(data) < period:
        return np.array([], dtype=float)

    k = 2 / (period + 1)
    value = float(np.mean(data[:period]))
    out = np.empty(len(data) - period + 1, dtype=float)
    for j, price in enumerate(data[period - 1:]):
        value = price * k + value * (1 - k)
        out[j] = value
    return out


# =============================================================================
# MOMENTUM INDICATORS
# =============================================================================


def rsi(prices: PriceInput, period: int = 14) -> Optional[float]:
    """
    Relative Strength Index over the trailing `period` deltas.

    Plain gain/loss sums (no Wilder smoothing). Zero deltas count as gains.
    The loss sum is floored at EPSILON, so an all-gain window reads ~100.
    """
    data = _as_array(prices)
    if len(data) <= period:
        return None

    deltas = np.diff(data[-(period + 1):])
    gains = float(np.sum(deltas[deltas >= 0]))
    losses = float(-np.sum(deltas[deltas < 0]))

    ratio = gains / max(EPSILON, losses)
    return 100 - 100 / (1 + ratio)


def macd(
    prices: PriceInput,
    fast_period: int = 12,
    slow_period: int = 26,
    signal_period: int = 9,
) -> MACDResult:
    """
    MACD (Moving Average Convergence Divergence).

    Fast and slow EMA series are aligned on their tails; the signal line is
    an EMA of the MACD series seeded with its first `signal_period` values.
    """
    data = _as_array(prices)
    if len(data) < slow_period + signal_period:
        return MACDResult(None, None, None)

    fast = ema_series(data, fast_period)
    slow = ema_series(data, slow_period)

    start = max(0, len(fast) - len(slow))
    macd_line = fast[start:] - slow

    k = 2 / (signal_period + 1)
    signal = float(np.mean(macd_line[:signal_period]))
    for value in macd_line[signal_period:]:
        signal = value * k + signal * (1 - k)

    latest = float(macd_line[-1])
    return MACDResult(macd=latest, signal=signal, histogram=latest - signal)


# =============================================================================
# TREND
# =============================================================================


def trend_slope(prices: PriceInput, period: int = 30) -> float:
    """
    Least-squares slope of the trailing `period` prices.

    x runs 0..1 across the window and the slope is divided by the window
    mean, so assets priced in cents and in thousands are comparable.
    """
    window = _as_array(prices)[-period:]
    m = len(window)
    if m < 2:
        return 0.0

    xs = np.arange(m, dtype=float) / (m - 1)
    x_mean = xs.mean()
    y_mean = float(window.mean())

    num = float(np.sum((xs - x_mean) * (window - y_mean)))
    den = float(np.sum((xs - x_mean) ** 2))
    if den == 0:
        return 0.0
    return (num / den) / max(EPSILON, y_mean)


# =============================================================================
# VOLATILITY
# =============================================================================


def log_returns(prices: PriceInput) -> np.ndarray:
    """ln(P[i] / P[i-1]) for consecutive prices."""
    data = _as_array(prices)
    if len(data) < 2:
        return np.array([], dtype=float)
    return np.log(data[1:] / data[:-1])


def volatility(prices: PriceInput, window: int = VOLATILITY_WINDOW) -> Optional[float]:
    """Population standard deviation of the trailing `window` log returns."""
    returns = log_returns(prices)[-window:]
    if len(returns) == 0:
        return None
    return float(np.std(returns))
