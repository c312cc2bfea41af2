"""Data quality validation for reconciled records.

Checks never raise: upstream data is shown as delivered, and a failed check
is something to log, not a reason to drop the view.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, fields

from voltracker.models.har import HARForecast
from voltracker.models.historical import HistoricalPoint
from voltracker.models.market import MarketRecord
from voltracker.models.record import CanonicalRecord
from voltracker.models.signal import Signal
from voltracker.models.volatility import VolatilityRecord


@dataclass
class ValidationCheck:
    """Single validation check result."""

    name: str
    passed: bool
    message: str = ""


@dataclass
class ValidationResult:
    """Aggregate validation result."""

    checks: list[ValidationCheck] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return all(c.passed for c in self.checks)

    @property
    def failed_checks(self) -> list[ValidationCheck]:
        return [c for c in self.checks if not c.passed]

    def extend(self, other: ValidationResult) -> None:
        self.checks.extend(other.checks)


def validate_market(market: MarketRecord) -> ValidationResult:
    """Checks:
        1. Finite prices
        2. Volume sanity (non-negative)
        3. OHLC consistency (high >= open/close/low, low <= open/close)
    """
    result = ValidationResult()

    prices = {
        "price": market.price,
        "open": market.open,
        "high": market.high,
        "low": market.low,
        "previous_close": market.previous_close,
    }
    bad = [name for name, value in prices.items() if not math.isfinite(value)]
    if bad:
        result.checks.append(ValidationCheck("finite_prices", False, f"non-finite: {', '.join(bad)}"))
    else:
        result.checks.append(ValidationCheck("finite_prices", True))

    if market.volume < 0:
        result.checks.append(ValidationCheck("volume_sanity", False, f"negative volume {market.volume}"))
    else:
        result.checks.append(ValidationCheck("volume_sanity", True))

    close = market.price
    if market.high < market.low:
        result.checks.append(ValidationCheck("ohlc_consistency", False, "high < low"))
    elif market.high < market.open or market.high < close:
        result.checks.append(ValidationCheck("ohlc_consistency", False, "high below open/close"))
    elif market.low > market.open or market.low > close:
        result.checks.append(ValidationCheck("ohlc_consistency", False, "low above open/close"))
    else:
        result.checks.append(ValidationCheck("ohlc_consistency", True))

    return result


def validate_volatility(volatility: VolatilityRecord) -> ValidationResult:
    """Every numeric volatility field must be finite and non-negative."""
    result = ValidationResult()
    negative = []
    for f in fields(VolatilityRecord):
        value = getattr(volatility, f.name)
        if isinstance(value, float) and (not math.isfinite(value) or value < 0):
            negative.append(f.name)
    if negative:
        result.checks.append(
            ValidationCheck("volatility_non_negative", False, f"invalid: {', '.join(negative)}")
        )
    else:
        result.checks.append(ValidationCheck("volatility_non_negative", True))
    return result


def validate_har(har: HARForecast) -> ValidationResult:
    """R² within [0, 1] and a non-negative MSE."""
    result = ValidationResult()
    if 0 <= har.r_squared <= 1:
        result.checks.append(ValidationCheck("r_squared_range", True))
    else:
        result.checks.append(
            ValidationCheck("r_squared_range", False, f"r_squared {har.r_squared} outside [0, 1]")
        )
    if har.mse >= 0:
        result.checks.append(ValidationCheck("mse_non_negative", True))
    else:
        result.checks.append(ValidationCheck("mse_non_negative", False, f"mse {har.mse} < 0"))
    return result


def validate_signals(signals: tuple[Signal, ...] | list[Signal]) -> ValidationResult:
    result = ValidationResult()
    out_of_range = sum(1 for s in signals if not 0 <= s.strength <= 1)
    if out_of_range:
        result.checks.append(
            ValidationCheck("signal_strength", False, f"{out_of_range} signals with strength outside [0, 1]")
        )
    else:
        result.checks.append(ValidationCheck("signal_strength", True))
    return result


def validate_history(points: tuple[HistoricalPoint, ...] | list[HistoricalPoint]) -> ValidationResult:
    result = ValidationResult()
    out_of_order = sum(1 for i in range(1, len(points)) if points[i].date < points[i - 1].date)
    if out_of_order:
        result.checks.append(ValidationCheck("history_order", False, f"{out_of_order} out of order"))
    else:
        result.checks.append(ValidationCheck("history_order", True))
    return result


def validate_record(record: CanonicalRecord) -> ValidationResult:
    """Run all quality checks on a canonical record."""
    result = ValidationResult()
    result.extend(validate_market(record.market))
    result.extend(validate_volatility(record.volatility))
    result.extend(validate_har(record.har))
    result.extend(validate_signals(record.signals))
    result.extend(validate_history(record.historical))
    return result
