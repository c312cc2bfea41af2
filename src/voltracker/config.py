"""Volatility engine configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum

from voltracker.defaults import (
    CONFIDENCE_MULTIPLIER,
    HISTORY_WINDOW,
    INTRADAY_HORIZON_DAYS,
    TRADING_DAYS_PER_YEAR,
)
from voltracker.errors import ErrorCode, VolatilityEngineError


class UnitConvention(Enum):
    """How a volatility of exactly ``1`` is read.

    Upstream sources mix fractions (0.18) and percentages (18.0). Anything
    above 1 is always a percentage; the value 1 itself is ambiguous.
    """

    DECIMAL = "decimal"  # 1 -> 1.0 (100% volatility)
    PERCENT = "percent"  # 1 -> 0.01 (1% volatility)


@dataclass(frozen=True)
class EngineConfig:
    """Configuration for VolatilityEngine.

    Attributes:
        unit_tie_break: Reading of a raw volatility equal to 1.
        trading_days: Trading days per year used to de-annualize volatility.
        confidence_multiplier: Sigma multiple used for price bands.
        intraday_horizon_days: Horizon (in days) of the intraday range.
        history_window: Number of most recent historical points annotated.
        validate: Whether to run quality checks on reconciled records.
    """

    unit_tie_break: UnitConvention = UnitConvention.DECIMAL
    trading_days: int = TRADING_DAYS_PER_YEAR
    confidence_multiplier: float = CONFIDENCE_MULTIPLIER
    intraday_horizon_days: float = INTRADAY_HORIZON_DAYS
    history_window: int = HISTORY_WINDOW
    validate: bool = True


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def config_from_env() -> EngineConfig:
    """Build an EngineConfig from environment variables.

    Environment variables:
        VOLTRACKER_UNIT_TIE_BREAK: "decimal" or "percent" (default: "decimal").
        VOLTRACKER_TRADING_DAYS: Trading days per year (default: 252).
        VOLTRACKER_CONFIDENCE_MULTIPLIER: Band sigma multiple (default: 2).
        VOLTRACKER_INTRADAY_HORIZON: Intraday horizon in days (default: 0.25).
        VOLTRACKER_HISTORY_WINDOW: Annotated history length (default: 60).
        VOLTRACKER_VALIDATE: Run quality checks (default: true).
    """
    try:
        tie_break = UnitConvention(
            os.getenv("VOLTRACKER_UNIT_TIE_BREAK", "decimal").strip().lower()
        )
        config = EngineConfig(
            unit_tie_break=tie_break,
            trading_days=int(os.getenv("VOLTRACKER_TRADING_DAYS", str(TRADING_DAYS_PER_YEAR))),
            confidence_multiplier=float(
                os.getenv("VOLTRACKER_CONFIDENCE_MULTIPLIER", str(CONFIDENCE_MULTIPLIER))
            ),
            intraday_horizon_days=float(
                os.getenv("VOLTRACKER_INTRADAY_HORIZON", str(INTRADAY_HORIZON_DAYS))
            ),
            history_window=int(os.getenv("VOLTRACKER_HISTORY_WINDOW", str(HISTORY_WINDOW))),
            validate=_env_bool("VOLTRACKER_VALIDATE", True),
        )
    except ValueError as exc:
        raise VolatilityEngineError(
            f"Invalid volatility engine configuration: {exc}",
            code=ErrorCode.INVALID_ARGUMENT,
        ) from exc

    if config.trading_days <= 0:
        raise VolatilityEngineError(
            "VOLTRACKER_TRADING_DAYS must be positive",
            code=ErrorCode.INVALID_ARGUMENT,
        )
    if config.history_window <= 0:
        raise VolatilityEngineError(
            "VOLTRACKER_HISTORY_WINDOW must be positive",
            code=ErrorCode.INVALID_ARGUMENT,
        )
    return config
