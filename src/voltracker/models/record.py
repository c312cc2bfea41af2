"""Canonical record — everything reconciled from one poll cycle."""

from __future__ import annotations

from dataclasses import dataclass, field

from voltracker.errors import ErrorCode
from voltracker.models.har import HARForecast
from voltracker.models.historical import HistoricalPoint
from voltracker.models.market import MarketRecord
from voltracker.models.signal import Signal
from voltracker.models.volatility import VolatilityRecord


@dataclass(frozen=True)
class ReconcileIssue:
    """A field that fell back to a default, was clamped or was dropped."""

    field: str
    code: ErrorCode
    message: str = ""


@dataclass(frozen=True)
class CanonicalRecord:
    """Reconciled market, volatility, HAR, signal and history data.

    Attributes:
        market: Price summary.
        volatility: Volatility indicators.
        har: HAR parameters and forecasts.
        signals: Trading alerts in upstream order.
        historical: Historical points ordered by date.
        issues: Fallbacks and repairs applied while reconciling.
    """

    market: MarketRecord
    volatility: VolatilityRecord
    har: HARForecast
    signals: tuple[Signal, ...] = ()
    historical: tuple[HistoricalPoint, ...] = ()
    issues: tuple[ReconcileIssue, ...] = field(default=())

    def issues_for(self, name: str) -> list[ReconcileIssue]:
        return [i for i in self.issues if i.field == name]
