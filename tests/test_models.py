"""Tests for data models."""

from datetime import datetime, timezone

import pytest

from voltracker.config import UnitConvention
from voltracker.errors import ErrorCode
from voltracker.models import (
    CanonicalRecord,
    MarketRecord,
    PriceRange,
    ReconcileIssue,
    Signal,
    VolatilityRecord,
    VolatilityTrend,
)


def _market(**kwargs) -> MarketRecord:
    defaults = dict(
        symbol="SPY", price=150.0, change=1.0, change_percent=0.67,
        volume=10000.0, high=151.0, low=148.5, open=149.0, previous_close=149.0,
    )
    defaults.update(kwargs)
    return MarketRecord(**defaults)


def _volatility(**kwargs) -> VolatilityRecord:
    defaults = dict(
        realized_volatility=18.5, garch_forecast=0.19, atr14=31.5,
        parkinson_estimator=14.0, garman_klass_estimator=0.15,
    )
    defaults.update(kwargs)
    return VolatilityRecord(**defaults)


class TestMarketRecord:
    def test_create(self):
        market = _market(timestamp=datetime(2024, 1, 15, 20, tzinfo=timezone.utc))
        assert market.price == 150.0
        assert market.market_cap is None
        assert market.day_range == pytest.approx(2.5)

    def test_week52_position(self):
        assert _market(week52_high=200.0, week52_low=100.0).week52_position == pytest.approx(0.5)
        assert _market().week52_position is None
        assert _market(week52_high=100.0, week52_low=100.0).week52_position is None

    def test_frozen(self):
        market = _market()
        with pytest.raises(AttributeError):
            market.price = 999.0  # type: ignore[misc]


class TestVolatilityRecord:
    def test_defaults(self):
        vol = _volatility()
        assert vol.volatility_trend is VolatilityTrend.STABLE
        assert vol.implied_volatility is None

    def test_normalized(self):
        vol = _volatility(implied_volatility=21.3).normalized()
        assert vol.realized_volatility == pytest.approx(0.185)
        assert vol.garch_forecast == 0.19
        assert vol.parkinson_estimator == pytest.approx(0.14)
        assert vol.implied_volatility == pytest.approx(0.213)
        assert vol.atr14 == 31.5

    def test_normalized_tie_break(self):
        vol = _volatility(garch_forecast=1.0)
        assert vol.normalized().garch_forecast == 1.0
        assert vol.normalized(UnitConvention.PERCENT).garch_forecast == 0.01

    def test_normalized_keeps_missing_implied(self):
        assert _volatility().normalized().implied_volatility is None


class TestPriceRange:
    def test_width_and_contains(self):
        band = PriceRange(horizon_days=1, base_price=100.0, upper=102.0, lower=98.0, move=2.0)
        assert band.width == pytest.approx(4.0)
        assert band.contains(98.0)
        assert band.contains(102.0)
        assert not band.contains(97.99)


class TestSignal:
    def test_optional_fields_default_none(self):
        signal = Signal(type="BUY", strength=0.8)
        assert signal.message == ""
        assert signal.price is None
        assert signal.indicator is None
        assert signal.id is None


class TestCanonicalRecord:
    def test_issues_for(self, sample_har):
        record = CanonicalRecord(
            market=_market(),
            volatility=_volatility(),
            har=sample_har,
            issues=(
                ReconcileIssue("atr14", ErrorCode.MISSING_FIELD),
                ReconcileIssue("open", ErrorCode.MALFORMED_VALUE, "non-numeric"),
            ),
        )
        assert [i.code for i in record.issues_for("atr14")] == [ErrorCode.MISSING_FIELD]
        assert record.issues_for("close") == []
        assert record.signals == ()
        assert record.historical == ()
