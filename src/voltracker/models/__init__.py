"""Volatility engine data models."""

from voltracker.models.har import HARForecast
from voltracker.models.historical import HistoricalPoint
from voltracker.models.market import MarketRecord
from voltracker.models.price_range import PriceRange
from voltracker.models.record import CanonicalRecord, ReconcileIssue
from voltracker.models.signal import Signal
from voltracker.models.volatility import VolatilityRecord, VolatilityTrend

__all__ = [
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
