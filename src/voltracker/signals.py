"""Trading signal classification and filtering."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from voltracker.defaults import MODERATE_SIGNAL_THRESHOLD, STRONG_SIGNAL_THRESHOLD
from voltracker.errors import ErrorCode, VolatilityEngineError
from voltracker.models.signal import Signal


class SignalFilter(Enum):
    """Dashboard signal filters."""

    ALL = "all"
    BUY = "buy"
    SELL = "sell"
    STRONG = "strong"

    @classmethod
    def parse(cls, value: SignalFilter | str) -> SignalFilter:
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise VolatilityEngineError(
                f"Unknown signal filter {value!r}; expected one of "
                f"{', '.join(f.value for f in cls)}",
                code=ErrorCode.INVALID_ARGUMENT,
            ) from None


class StrengthTier(Enum):
    STRONG = "Strong"
    MODERATE = "Moderate"
    WEAK = "Weak"


class SignalDirection(Enum):
    BUY = "buy"
    SELL = "sell"
    NEUTRAL = "neutral"


@dataclass(frozen=True)
class SignalSummary:
    """Signal counts shown under the signal table."""

    total: int
    buy: int
    sell: int
    strong: int


def strength_tier(strength: float) -> StrengthTier:
    """>=0.7 Strong, >=0.4 Moderate, else Weak."""
    if strength >= STRONG_SIGNAL_THRESHOLD:
        return StrengthTier.STRONG
    if strength >= MODERATE_SIGNAL_THRESHOLD:
        return StrengthTier.MODERATE
    return StrengthTier.WEAK


def signal_direction(signal: Signal) -> SignalDirection:
    """Direction from the keyword in ``signal.type`` ("buy" wins over "sell")."""
    kind = signal.type.lower()
    if "buy" in kind:
        return SignalDirection.BUY
    if "sell" in kind:
        return SignalDirection.SELL
    return SignalDirection.NEUTRAL


def is_strong(signal: Signal) -> bool:
    return signal.strength >= STRONG_SIGNAL_THRESHOLD


def _matches(signal: Signal, selected: SignalFilter) -> bool:
    if selected is SignalFilter.BUY:
        return "buy" in signal.type.lower()
    if selected is SignalFilter.SELL:
        return "sell" in signal.type.lower()
    if selected is SignalFilter.STRONG:
        return is_strong(signal)
    return True


def classify(
    signals: Iterable[Signal], filter: SignalFilter | str = SignalFilter.ALL,
) -> list[Signal]:
    """Return the signals that pass ``filter``, in input order.

    "buy" and "sell" are case-insensitive substring tests on ``type``;
    "strong" keeps ``strength >= 0.7``. The input is not modified.

    Raises:
        VolatilityEngineError: if ``filter`` is not a known filter name.
    """
    selected = SignalFilter.parse(filter)
    return [s for s in signals if _matches(s, selected)]


def summarize_signals(signals: Iterable[Signal]) -> SignalSummary:
    items = list(signals)
    return SignalSummary(
        total=len(items),
        buy=sum(1 for s in items if _matches(s, SignalFilter.BUY)),
        sell=sum(1 for s in items if _matches(s, SignalFilter.SELL)),
        strong=sum(1 for s in items if is_strong(s)),
    )
