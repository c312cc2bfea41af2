"""Tests for signal classification and filtering."""

import pytest

from voltracker.errors import ErrorCode, VolatilityEngineError
from voltracker.models.signal import Signal
from voltracker.signals import (
    SignalDirection,
    SignalFilter,
    StrengthTier,
    classify,
    signal_direction,
    strength_tier,
    summarize_signals,
)


class TestClassify:
    def test_all_returns_everything_in_order(self, sample_signals):
        assert classify(sample_signals, "all") == sample_signals

    def test_buy_case_insensitive_substring(self, sample_signals):
        result = classify(sample_signals, SignalFilter.BUY)
        assert [s.message for s in result] == ["a", "e"]

    def test_sell(self, sample_signals):
        result = classify(sample_signals, "sell")
        assert [s.message for s in result] == ["b", "c"]

    def test_strong_is_exact_subset_in_order(self, sample_signals):
        result = classify(sample_signals, "strong")
        assert result == [s for s in sample_signals if s.strength >= 0.7]
        assert [s.message for s in result] == ["a", "c"]

    def test_input_not_mutated(self, sample_signals):
        before = list(sample_signals)
        classify(sample_signals, "buy")
        assert sample_signals == before

    def test_filter_string_is_case_insensitive(self, sample_signals):
        assert classify(sample_signals, " STRONG ") == classify(sample_signals, "strong")

    def test_unknown_filter_raises(self, sample_signals):
        with pytest.raises(VolatilityEngineError) as exc_info:
            classify(sample_signals, "hodl")
        assert exc_info.value.code is ErrorCode.INVALID_ARGUMENT

    def test_accepts_generator(self, sample_signals):
        assert len(classify(s for s in sample_signals)) == len(sample_signals)


class TestTiers:
    @pytest.mark.parametrize("strength, tier", [
        (1.0, StrengthTier.STRONG),
        (0.7, StrengthTier.STRONG),
        (0.6999, StrengthTier.MODERATE),
        (0.4, StrengthTier.MODERATE),
        (0.3999, StrengthTier.WEAK),
        (0.0, StrengthTier.WEAK),
    ])
    def test_boundaries(self, strength, tier):
        assert strength_tier(strength) is tier

    def test_direction(self):
        assert signal_direction(Signal(type="STRONG_BUY", strength=1)) is SignalDirection.BUY
        assert signal_direction(Signal(type="Sell", strength=1)) is SignalDirection.SELL
        assert signal_direction(Signal(type="hold", strength=1)) is SignalDirection.NEUTRAL


class TestSummary:
    def test_counts(self, sample_signals):
        summary = summarize_signals(sample_signals)
        assert summary.total == 5
        assert summary.buy == 2
        assert summary.sell == 2
        assert summary.strong == 2

    def test_empty(self):
        summary = summarize_signals([])
        assert (summary.total, summary.buy, summary.sell, summary.strong) == (0, 0, 0, 0)
