"""Shared constants and the fallback defaults table.

Every literal that stands in for a missing upstream value lives here, so the
reconciler, the range projector and the history annotator agree on them.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

# Volatility sub-block, in the units upstream reports them.
VOLATILITY_DEFAULTS: Mapping[str, float] = MappingProxyType({
    "realized_volatility": 1.5786,
    "atr14": 29.23,
    "parkinson_estimator": 0.123,
    "garman_klass_estimator": 0.127,
    "garch_forecast": 1.4977,
})

# HAR model parameters and forecasts.
HAR_DEFAULTS: Mapping[str, float] = MappingProxyType({
    "daily": 0.0918,
    "weekly": 0.2053,
    "monthly": 0.4306,
    "intercept": 0.001,
    "r_squared": 0.8691,
    "mse": 0.0001,
    "forecast_1d": 0.0918,
    "forecast_5d": 0.2053,
    "forecast_22d": 0.4306,
})

DEFAULT_VOLATILITY_TREND = "stable"
DEFAULT_SYMBOL = "SPY"

# Price-band conventions
TRADING_DAYS_PER_YEAR = 252
CONFIDENCE_MULTIPLIER = 2.0  # ~95% two-sided under normal returns
INTRADAY_HORIZON_DAYS = 0.25

# Stand-ins used by the dashboard range presets when a figure is zero
FALLBACK_GARCH_VOLATILITY = 15.0
FALLBACK_REALIZED_VOLATILITY = 18.0
FALLBACK_POINT_VOLATILITY = 0.15

HISTORY_WINDOW = 60

# Classification thresholds (inclusive lower bounds)
FIT_QUALITY_THRESHOLDS: tuple[tuple[float, str], ...] = (
    (0.8, "Excellent"),
    (0.6, "Good"),
    (0.4, "Fair"),
)
STRONG_SIGNAL_THRESHOLD = 0.7
MODERATE_SIGNAL_THRESHOLD = 0.4

RISK_HIGH_THRESHOLD = 2.0
RISK_MEDIUM_THRESHOLD = 1.5
