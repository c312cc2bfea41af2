"""Volatility indicator data model."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum

from voltracker.config import UnitConvention
from voltracker.units import normalize_volatility


class VolatilityTrend(Enum):
    """Direction of recent volatility."""

    INCREASING = "increasing"
    DECREASING = "decreasing"
    STABLE = "stable"


@dataclass(frozen=True)
class VolatilityRecord:
    """Volatility estimates for one poll cycle.

    Figures are kept in the units upstream reported them in (fractions or
    percentages); every field is non-negative. Use :meth:`normalized` to get
    decimal fractions.

    Attributes:
        realized_volatility: Volatility from observed returns.
        garch_forecast: GARCH one-step-ahead volatility forecast.
        atr14: 14-period Average True Range (price units).
        parkinson_estimator: High/low range-based estimate.
        garman_klass_estimator: OHLC range-based estimate.
        volatility_trend: Recent direction of volatility.
        implied_volatility: Implied volatility (VIX proxy), if reported.
        timestamp: Timestamp of the estimates, if reported.
    """

    realized_volatility: float
    garch_forecast: float
    atr14: float
    parkinson_estimator: float
    garman_klass_estimator: float
    volatility_trend: VolatilityTrend = VolatilityTrend.STABLE
    implied_volatility: float | None = None
    timestamp: datetime | None = None

    def normalized(
        self, tie_break: UnitConvention = UnitConvention.DECIMAL,
    ) -> VolatilityRecord:
        """Copy with ratio fields as decimal fractions (ATR is left as-is)."""
        implied = self.implied_volatility
        return replace(
            self,
            realized_volatility=normalize_volatility(self.realized_volatility, tie_break),
            garch_forecast=normalize_volatility(self.garch_forecast, tie_break),
            parkinson_estimator=normalize_volatility(self.parkinson_estimator, tie_break),
            garman_klass_estimator=normalize_volatility(self.garman_klass_estimator, tie_break),
            implied_volatility=(
                normalize_volatility(implied, tie_break) if implied is not None else None
            ),
        )
