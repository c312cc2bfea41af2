"""Volatility indicator assessment (risk level and market condition)."""

from __future__ import annotations

from enum import Enum

from voltracker.defaults import RISK_HIGH_THRESHOLD, RISK_MEDIUM_THRESHOLD
from voltracker.models.volatility import VolatilityRecord


class RiskLevel(Enum):
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


class MarketCondition(Enum):
    CALMING = "CALMING"
    HEATING = "HEATING"


def risk_level(record: VolatilityRecord) -> RiskLevel:
    """Realized volatility (as reported) above 2 is HIGH, above 1.5 MEDIUM."""
    if record.realized_volatility > RISK_HIGH_THRESHOLD:
        return RiskLevel.HIGH
    if record.realized_volatility > RISK_MEDIUM_THRESHOLD:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def market_condition(record: VolatilityRecord) -> MarketCondition:
    """CALMING when realized volatility exceeds the GARCH forecast."""
    if record.realized_volatility > record.garch_forecast:
        return MarketCondition.CALMING
    return MarketCondition.HEATING
