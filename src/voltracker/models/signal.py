"""Trading signal data model."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Signal:
    """Discrete trading alert.

    Attributes:
        type: Free-form alert type, e.g. "BUY", "strong_sell".
        strength: Confidence in [0, 1].
        message: Human-readable description.
        timestamp: When the alert fired, if reported.
        price: Price at which the alert fired.
        indicator: Name of the indicator that produced it.
        id: Upstream identifier.
    """

    type: str
    strength: float
    message: str = ""
    timestamp: datetime | None = None
    price: float | None = None
    indicator: str | None = None
    id: int | None = None
