"""Market (price summary) data model."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class MarketRecord:
    """Canonical price summary for one poll cycle.

    Attributes:
        symbol: Ticker or index symbol.
        price: Last (current) price.
        change: Dollar change versus the session open or reported change.
        change_percent: Percent change matching ``change``.
        volume: Session volume.
        high: Session high.
        low: Session low.
        open: Session open.
        previous_close: Previous close. Approximated by ``open`` when the
            upstream does not report it.
        timestamp: Quote timestamp, if reported.
        market_cap: Market capitalisation, if reported.
        pe_ratio: Price/earnings ratio, if reported.
        week52_high: 52-week high, if reported.
        week52_low: 52-week low, if reported.
    """

    symbol: str
    price: float
    change: float
    change_percent: float
    volume: float
    high: float
    low: float
    open: float
    previous_close: float
    timestamp: datetime | None = None
    market_cap: float | None = None
    pe_ratio: float | None = None
    week52_high: float | None = None
    week52_low: float | None = None

    @property
    def day_range(self) -> float:
        """High-low span of the session."""
        return self.high - self.low

    @property
    def week52_position(self) -> float | None:
        """Where ``price`` sits inside the 52-week range (0 = low, 1 = high)."""
        if self.week52_high is None or self.week52_low is None:
            return None
        span = self.week52_high - self.week52_low
        if span <= 0:
            return None
        return (self.price - self.week52_low) / span
