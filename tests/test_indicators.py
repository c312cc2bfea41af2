"""Tests for risk level and market condition."""

import pytest

from voltracker.indicators import MarketCondition, RiskLevel, market_condition, risk_level
from voltracker.models.volatility import VolatilityRecord


def _volatility(realized: float, garch: float = 1.0) -> VolatilityRecord:
    return VolatilityRecord(
        realized_volatility=realized, garch_forecast=garch, atr14=10.0,
        parkinson_estimator=0.1, garman_klass_estimator=0.1,
    )


class TestRiskLevel:
    @pytest.mark.parametrize("realized, expected", [
        (2.5, RiskLevel.HIGH),
        (2.0, RiskLevel.MEDIUM),
        (1.5786, RiskLevel.MEDIUM),
        (1.5, RiskLevel.LOW),
        (0.0, RiskLevel.LOW),
    ])
    def test_thresholds(self, realized, expected):
        assert risk_level(_volatility(realized)) is expected


class TestMarketCondition:
    def test_calming(self):
        assert market_condition(_volatility(1.6, 1.4)) is MarketCondition.CALMING

    def test_heating(self):
        assert market_condition(_volatility(1.4, 1.6)) is MarketCondition.HEATING

    def test_equal_is_heating(self):
        assert market_condition(_volatility(1.5, 1.5)) is MarketCondition.HEATING
