"""Tests for the signal scoring rule."""

import pytest

from pricehub.schemas.analysis import IndicatorSet, Signal
from pricehub.services.signals import compose_signal
from pricehub.services.signals.composer import classify, score_indicators


def make_indicators(**overrides) -> IndicatorSet:
    values = dict(
        sma20=None,
        sma50=None,
        rsi14=None,
        macd=None,
        macd_signal=None,
        macd_hist=None,
        trend_slope=0.0,
        vol7=None,
    )
    values.update(overrides)
    return IndicatorSet(**values)


class TestScore:
    def test_undefined_comparisons_count_against(self):
        # SMA and MACD both undefined: -1 each; RSI undefined: 0
        assert score_indicators(make_indicators()) == -2

    def test_all_bullish_components(self):
        indicators = make_indicators(
            sma20=110.0, sma50=100.0, macd=2.0, macd_signal=1.0, rsi14=70.0, trend_slope=0.01
        )
        assert score_indicators(indicators) == pytest.approx(3.5)

    @pytest.mark.parametrize("rsi_value,delta", [(60.0, 0), (40.0, 0), (60.01, 1), (39.99, -1)])
    def test_rsi_bands_are_exclusive(self, rsi_value, delta):
        base = dict(sma20=2.0, sma50=1.0, macd=0.0, macd_signal=1.0)
        assert score_indicators(make_indicators(rsi14=rsi_value, **base)) == delta

    def test_equal_averages_count_against(self):
        indicators = make_indicators(sma20=5.0, sma50=5.0, macd=1.0, macd_signal=1.0)
        assert score_indicators(indicators) == -2

    @pytest.mark.parametrize(
        "norm,expected",
        [(0.25, Signal.NEUTRAL), (0.2501, Signal.BULLISH), (-0.25, Signal.NEUTRAL), (-0.26, Signal.BEARISH)],
    )
    def test_classify_thresholds(self, norm, expected):
        assert classify(norm) == expected


class TestComposeSignal:
    def test_missing_everything(self):
        outcome = compose_signal(make_indicators(), 100.0)

        assert outcome.norm_score == pytest.approx(-2 / 3)
        assert outcome.signal == Signal.BEARISH
        assert outcome.confidence == pytest.approx(0.5 + (2 / 3) * 0.5)
        # vol undefined: 1% fallback → 1.2% move, drift -0.8%
        assert outcome.prediction.band_pct == pytest.approx((-0.02, 0.004))

    def test_score_clamped(self):
        indicators = make_indicators(
            sma20=2.0, sma50=1.0, macd=2.0, macd_signal=1.0, rsi14=90.0, trend_slope=1.0
        )
        outcome = compose_signal(indicators, 10.0)
        assert outcome.score == pytest.approx(53.0)
        assert outcome.norm_score == 1.0
        assert outcome.signal == Signal.BULLISH

    def test_neutral_with_high_volatility(self):
        indicators = make_indicators(
            sma20=2.0, sma50=1.0, macd=0.0, macd_signal=1.0, rsi14=50.0, vol7=0.05
        )
        outcome = compose_signal(indicators, 100.0)

        assert outcome.signal == Signal.NEUTRAL
        assert outcome.confidence == pytest.approx(0.4)
        # 1.2 × 5% capped at 5%
        assert outcome.prediction.band_pct == pytest.approx((-0.05, 0.05))

    @pytest.mark.parametrize("vol,expected_conf", [(1.0, 0.1), (0.0, 0.95)])
    def test_confidence_clamped(self, vol, expected_conf):
        indicators = make_indicators(
            sma20=2.0, sma50=1.0, macd=2.0, macd_signal=1.0, rsi14=80.0, vol7=vol
        )
        assert compose_signal(indicators, 1.0).confidence == pytest.approx(expected_conf)

    def test_move_floor(self):
        indicators = make_indicators(
            sma20=2.0, sma50=1.0, macd=0.0, macd_signal=1.0, rsi14=50.0, vol7=0.001
        )
        low, high = compose_signal(indicators, 1.0).prediction.band_pct
        assert high - low == pytest.approx(0.008)

    def test_zero_volatility_uses_fallback_move(self):
        indicators = make_indicators(
            sma20=2.0, sma50=1.0, macd=0.0, macd_signal=1.0, rsi14=50.0, vol7=0.0
        )
        low, high = compose_signal(indicators, 1.0).prediction.band_pct
        assert high - low == pytest.approx(0.024)

    @pytest.mark.parametrize("slope", [-0.05, -0.004, 0.0, 0.003, 0.05])
    @pytest.mark.parametrize("vol", [None, 0.0, 0.002, 0.03, 0.4])
    def test_band_invariants(self, slope, vol):
        latest = 250.0
        indicators = make_indicators(
            sma20=1.0, sma50=2.0, macd=1.0, macd_signal=0.5, rsi14=45.0,
            trend_slope=slope, vol7=vol,
        )
        outcome = compose_signal(indicators, latest)
        low, high = outcome.prediction.band_abs
        drift = outcome.norm_score * 0.012

        assert 0.1 <= outcome.confidence <= 0.95
        assert low < high
        assert (low + high) / 2 == pytest.approx(latest * (1 + drift))
        assert outcome.prediction.horizon_hours == 24
        assert -1.0 <= outcome.norm_score <= 1.0
