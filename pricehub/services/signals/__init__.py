"""Deterministic signal/confidence/band scoring over an IndicatorSet."""

from pricehub.services.signals.composer import (
    SignalOutcome,
    classify,
    compose_signal,
    score_indicators,
)

__all__ = [
    "SignalOutcome",
    "classify",
    "compose_signal",
    "score_indicators",
]
