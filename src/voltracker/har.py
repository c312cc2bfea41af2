"""HAR forecast evaluation — fit quality, dominant horizon, forecasts.

Nothing here fits a model: the coefficients arrive pre-computed and this
module only reads them.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping

from voltracker.config import UnitConvention
from voltracker.defaults import FIT_QUALITY_THRESHOLDS
from voltracker.models.har import HARForecast
from voltracker.units import normalize_volatility


class FitQuality(Enum):
    """Bucketed in-sample R²."""

    EXCELLENT = "Excellent"
    GOOD = "Good"
    FAIR = "Fair"
    POOR = "Poor"


class DominantHorizon(Enum):
    """Which realized-volatility window carries the most weight."""

    LONG_TERM = "long-term"
    MEDIUM_TERM = "medium-term"
    SHORT_TERM = "short-term"


@dataclass(frozen=True)
class HARComponents:
    """Realized-volatility regressors (RV_d, RV_w, RV_m) for the HAR equation."""

    daily: float
    weekly: float
    monthly: float


@dataclass(frozen=True)
class HARAssessment:
    """Derived view of a HAR parameter set.

    Attributes:
        forecasts: Volatility forecasts keyed "1d", "5d", "22d" (fractions).
        fit_quality: R² bucket.
        dominant_horizon: Window with the largest coefficient.
        model_estimate: Intercept plus weighted regressors, when regressors
            were supplied.
    """

    forecasts: Mapping[str, float]
    fit_quality: FitQuality
    dominant_horizon: DominantHorizon
    model_estimate: float | None = None


def fit_quality(r_squared: float) -> FitQuality:
    """Bucket R²: >=0.8 Excellent, >=0.6 Good, >=0.4 Fair, else Poor.

    Out-of-range values are bucketed by the same inequalities; NaN is Poor.
    """
    for threshold, label in FIT_QUALITY_THRESHOLDS:
        if r_squared >= threshold:
            return FitQuality(label)
    return FitQuality.POOR


def dominant_horizon(record: HARForecast) -> DominantHorizon:
    if record.monthly > record.weekly and record.monthly > record.daily:
        return DominantHorizon.LONG_TERM
    if record.weekly > record.daily:
        return DominantHorizon.MEDIUM_TERM
    return DominantHorizon.SHORT_TERM


def model_estimate(
    record: HARForecast,
    components: HARComponents,
    tie_break: UnitConvention = UnitConvention.DECIMAL,
) -> float:
    """Evaluate ``intercept + b_d*RV_d + b_w*RV_w + b_m*RV_m``.

    Regressors are normalized to decimal fractions first.
    """
    return (
        record.intercept
        + record.daily * normalize_volatility(components.daily, tie_break)
        + record.weekly * normalize_volatility(components.weekly, tie_break)
        + record.monthly * normalize_volatility(components.monthly, tie_break)
    )


def evaluate_har(
    record: HARForecast,
    components: HARComponents | None = None,
    tie_break: UnitConvention = UnitConvention.DECIMAL,
) -> HARAssessment:
    """Summarize a pre-fitted HAR model.

    Args:
        record: Reconciled HAR parameters and forecasts.
        components: Optional realized-volatility regressors; when given,
            the one-step model estimate is computed too.
        tie_break: Reading of a forecast equal to exactly 1.
    """
    forecasts = MappingProxyType({
        "1d": normalize_volatility(record.forecast_1d, tie_break),
        "5d": normalize_volatility(record.forecast_5d, tie_break),
        "22d": normalize_volatility(record.forecast_22d, tie_break),
    })
    estimate = None
    if components is not None:
        estimate = model_estimate(record, components, tie_break)

    return HARAssessment(
        forecasts=forecasts,
        fit_quality=fit_quality(record.r_squared),
        dominant_horizon=dominant_horizon(record),
        model_estimate=estimate,
    )
