"""Historical (daily OHLCV) data model."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class HistoricalPoint:
    """Single historical price point (OHLCV + optional volatility).

    Attributes:
        date: Session date/time.
        open: Opening price.
        high: High price.
        low: Low price.
        close: Closing price.
        volume: Trading volume.
        volatility: Volatility reported for this point.
    """

    date: datetime
    open: float
    high: float
    low: float
    close: float
    volume: float
    volatility: float | None = None
