"""voltracker — volatility normalization, HAR forecasting and price bands.

Reconciles partial upstream payloads into one canonical record, reads
pre-fitted HAR models, and turns volatility figures into confidence bands.

Quick start::

    from voltracker import create_engine_from_env
    engine = create_engine_from_env()
    view = engine.build(summary_payload, analysis_payload)
    print(view.har.fit_quality, view.ranges["one_day"])
"""

from __future__ import annotations

from voltracker.config import EngineConfig, UnitConvention, config_from_env
from voltracker.engine import DashboardView, VolatilityEngine
from voltracker.errors import ErrorCode, VolatilityEngineError
from voltracker.har import (
    DominantHorizon,
    FitQuality,
    HARAssessment,
    HARComponents,
    evaluate_har,
)
from voltracker.history import HistoryStats, annotate_history, history_frame, history_stats
from voltracker.indicators import MarketCondition, RiskLevel, market_condition, risk_level
from voltracker.models import (
    CanonicalRecord,
    HARForecast,
    HistoricalPoint,
    MarketRecord,
    PriceRange,
    ReconcileIssue,
    Signal,
    VolatilityRecord,
    VolatilityTrend,
)
from voltracker.payloads import PrimaryOnly, PrimaryWithAnalysis, ingest
from voltracker.ranges import project_range, project_standard_ranges
from voltracker.reconcile import reconcile
from voltracker.signals import (
    SignalFilter,
    StrengthTier,
    classify,
    strength_tier,
    summarize_signals,
)
from voltracker.units import normalize_volatility

__version__ = "0.1.0"

__all__ = [
    # Engine
    "VolatilityEngine",
    "DashboardView",
    "create_engine_from_env",
    # Config
    "EngineConfig",
    "UnitConvention",
    "config_from_env",
    # Errors
    "VolatilityEngineError",
    "ErrorCode",
    # Core operations
    "normalize_volatility",
    "ingest",
    "reconcile",
    "evaluate_har",
    "project_range",
    "project_standard_ranges",
    "classify",
    "strength_tier",
    "summarize_signals",
    "annotate_history",
    "history_frame",
    "history_stats",
    "risk_level",
    "market_condition",
    # Results
    "HARAssessment",
    "HARComponents",
    "FitQuality",
    "DominantHorizon",
    "SignalFilter",
    "StrengthTier",
    "HistoryStats",
    "RiskLevel",
    "MarketCondition",
    "PrimaryOnly",
    "PrimaryWithAnalysis",
    # Models
    "MarketRecord",
    "VolatilityRecord",
    "VolatilityTrend",
    "HARForecast",
    "PriceRange",
    "Signal",
    "HistoricalPoint",
    "CanonicalRecord",
    "ReconcileIssue",
]


def create_engine_from_env() -> VolatilityEngine:
    """Zero-config factory — reads engine settings from ``VOLTRACKER_*`` env vars.

    See :func:`voltracker.config.config_from_env` for the variables.
    """
    return VolatilityEngine(config_from_env())
