"""Confidence-interval price projection.

A volatility figure becomes a symmetric price band::

    daily   = annualized / sqrt(trading_days)
    horizon = daily * sqrt(horizon_days)
    move    = |base_price| * horizon * multiplier

With the default multiplier of 2 the band approximates a 95% two-sided
interval under normally distributed returns.
"""

from __future__ import annotations

import logging
import math
from types import MappingProxyType
from typing import Mapping

from voltracker.config import EngineConfig, UnitConvention
from voltracker.defaults import (
    CONFIDENCE_MULTIPLIER,
    FALLBACK_GARCH_VOLATILITY,
    FALLBACK_REALIZED_VOLATILITY,
    TRADING_DAYS_PER_YEAR,
)
from voltracker.models.price_range import PriceRange
from voltracker.models.volatility import VolatilityRecord
from voltracker.units import normalize_volatility, to_number

logger = logging.getLogger(__name__)


def horizon_volatility(
    annualized_vol: float,
    horizon_days: float,
    trading_days: int = TRADING_DAYS_PER_YEAR,
    tie_break: UnitConvention = UnitConvention.DECIMAL,
) -> float:
    """Scale an annualized volatility to ``horizon_days`` (square-root of time)."""
    days = to_number(horizon_days)
    if days is None or not math.isfinite(days) or days <= 0:
        return 0.0
    daily = normalize_volatility(annualized_vol, tie_break) / math.sqrt(trading_days)
    return daily * math.sqrt(days)


def project_range(
    annualized_vol: float,
    horizon_days: float,
    base_price: float,
    *,
    trading_days: int = TRADING_DAYS_PER_YEAR,
    multiplier: float = CONFIDENCE_MULTIPLIER,
    tie_break: UnitConvention = UnitConvention.DECIMAL,
) -> PriceRange:
    """Project a symmetric price band around ``base_price``.

    ``annualized_vol`` may be a fraction or a percentage. A non-positive
    horizon yields a zero-width band. Non-positive base prices are not
    rejected: the band is returned as computed (zero-width at 0, negative
    bounds below it) and the caller decides whether to display it.
    """
    base = to_number(base_price)
    if base is None or not math.isfinite(base):
        logger.debug("non-finite base price %r treated as 0", base_price)
        base = 0.0
    vol = horizon_volatility(annualized_vol, horizon_days, trading_days, tie_break)
    move = abs(base) * vol * multiplier
    return PriceRange(
        horizon_days=horizon_days,
        base_price=base,
        upper=base + move,
        lower=base - move,
        move=move,
    )


def project_standard_ranges(
    volatility: VolatilityRecord,
    price: float,
    open_price: float | None = None,
    config: EngineConfig | None = None,
) -> Mapping[str, PriceRange]:
    """Dashboard presets: today, tomorrow, next week, next month.

    GARCH drives the intraday, one-day and five-day bands; realized
    volatility drives the 22-day band. Today's band is centred on the open.
    A zero volatility figure falls back to 15% (GARCH) or 18% (realized).
    """
    config = config or EngineConfig()
    garch = volatility.garch_forecast or FALLBACK_GARCH_VOLATILITY
    realized = volatility.realized_volatility or FALLBACK_REALIZED_VOLATILITY

    def band(vol: float, days: float, base: float) -> PriceRange:
        return project_range(
            vol,
            days,
            base,
            trading_days=config.trading_days,
            multiplier=config.confidence_multiplier,
            tie_break=config.unit_tie_break,
        )

    return MappingProxyType({
        "intraday": band(garch, config.intraday_horizon_days, open_price or price),
        "one_day": band(garch, 1, price),
        "five_day": band(garch, 5, price),
        "one_month": band(realized, 22, price),
    })
