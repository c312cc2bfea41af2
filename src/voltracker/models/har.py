"""HAR (Heterogeneous Autoregressive) model data model."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class HARForecast:
    """Pre-fitted HAR parameters and the forecasts they produced.

    Attributes:
        daily: Coefficient on daily realized volatility.
        weekly: Coefficient on weekly realized volatility.
        monthly: Coefficient on monthly realized volatility.
        intercept: Regression intercept.
        r_squared: In-sample coefficient of determination.
        mse: In-sample mean squared error.
        forecast_1d: One-day volatility forecast.
        forecast_5d: Five-day volatility forecast.
        forecast_22d: Twenty-two-day volatility forecast.
        timestamp: Fit timestamp, if reported.
    """

    daily: float
    weekly: float
    monthly: float
    intercept: float
    r_squared: float
    mse: float
    forecast_1d: float
    forecast_5d: float
    forecast_22d: float
    timestamp: datetime | None = None
