"""Price confidence band data model."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PriceRange:
    """Symmetric price band around a base price.

    Attributes:
        horizon_days: Horizon in trading days (fractional for intraday).
        base_price: Price the band is centred on.
        upper: Upper bound (``base_price + move``).
        lower: Lower bound (``base_price - move``).
        move: Half-width of the band.
    """

    horizon_days: float
    base_price: float
    upper: float
    lower: float
    move: float

    @property
    def width(self) -> float:
        return self.upper - self.lower

    def contains(self, price: float) -> bool:
        """True if ``price`` lies inside the band (inclusive)."""
        return self.lower <= price <= self.upper
