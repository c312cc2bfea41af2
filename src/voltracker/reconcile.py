"""Payload reconciler — one canonical record from partial upstream payloads.

Resolution order for every numeric field, first available wins:

1. the dedicated field on the analysis payload (``volatilityIndicators`` /
   ``harModel``),
2. the matching field in the primary payload's nested ``volatility`` (or
   ``price``) block,
3. the literal default from :mod:`voltracker.defaults`.

Keys are accepted in camelCase or snake_case. Inputs are never mutated, and
corrupt values degrade to defaults or zero instead of raising; every such
repair is recorded as a :class:`ReconcileIssue`.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Iterable, Mapping

import pandas as pd

from voltracker.defaults import (
    DEFAULT_SYMBOL,
    DEFAULT_VOLATILITY_TREND,
    HAR_DEFAULTS,
    VOLATILITY_DEFAULTS,
)
from voltracker.errors import ErrorCode
from voltracker.models.har import HARForecast
from voltracker.models.historical import HistoricalPoint
from voltracker.models.market import MarketRecord
from voltracker.models.record import CanonicalRecord, ReconcileIssue
from voltracker.models.signal import Signal
from voltracker.models.volatility import VolatilityRecord, VolatilityTrend
from voltracker.payloads import Payload, RawPayload, analysis_of, ingest
from voltracker.units import sanitize_volatility, to_number

logger = logging.getLogger(__name__)

_MISSING = object()
_EMPTY: Mapping[str, Any] = {}


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def _aliases(name: str, *extra: str) -> tuple[str, ...]:
    """``name`` and ``extra`` keys, each in snake_case and camelCase."""
    keys: list[str] = []
    for key in (name, *extra):
        keys += [key, _camel(key)]
    return tuple(dict.fromkeys(keys))


@dataclass(frozen=True)
class FieldRule:
    """How one numeric field is located and repaired.

    Attributes:
        name: Canonical (snake_case) field name.
        analysis_keys: Keys tried on the analysis sub-block.
        primary_keys: Keys tried on the primary nested block.
        default: Literal used when no source has the field.
        non_negative: Clamp negatives to zero (volatility-like fields).
    """

    name: str
    analysis_keys: tuple[str, ...]
    primary_keys: tuple[str, ...]
    default: float
    non_negative: bool = True


VOLATILITY_RULES: tuple[FieldRule, ...] = (
    FieldRule(
        "realized_volatility",
        _aliases("realized_volatility", "realized"),
        _aliases("realized_volatility", "realized"),
        VOLATILITY_DEFAULTS["realized_volatility"],
    ),
    FieldRule(
        "garch_forecast",
        _aliases("garch_forecast", "garch"),
        _aliases("garch_forecast", "garch"),
        VOLATILITY_DEFAULTS["garch_forecast"],
    ),
    FieldRule(
        "atr14",
        _aliases("atr14", "atr_14", "atr"),
        _aliases("atr14", "atr_14", "atr"),
        VOLATILITY_DEFAULTS["atr14"],
    ),
    FieldRule(
        "parkinson_estimator",
        _aliases("parkinson_estimator", "parkinson"),
        _aliases("parkinson_estimator", "parkinson"),
        VOLATILITY_DEFAULTS["parkinson_estimator"],
    ),
    FieldRule(
        "garman_klass_estimator",
        _aliases("garman_klass_estimator", "garman_klass"),
        _aliases("garman_klass_estimator", "garman_klass"),
        VOLATILITY_DEFAULTS["garman_klass_estimator"],
    ),
)

# Coefficients and the intercept may legitimately be negative.
_SIGNED_HAR_FIELDS = frozenset({"daily", "weekly", "monthly", "intercept", "r_squared"})

HAR_RULES: tuple[FieldRule, ...] = tuple(
    FieldRule(
        name,
        _aliases(name),
        _aliases(name, f"har_{name}"),
        default,
        non_negative=name not in _SIGNED_HAR_FIELDS,
    )
    for name, default in HAR_DEFAULTS.items()
)

_TREND_KEYS = _aliases("volatility_trend", "trend")
_IMPLIED_KEYS = _aliases("implied_volatility", "implied", "iv")


class _IssueLog:
    """Collects reconciliation issues and mirrors them to the logger."""

    def __init__(self) -> None:
        self.items: list[ReconcileIssue] = []

    def add(self, field: str, code: ErrorCode, message: str) -> None:
        logger.debug("reconcile %s: %s (%s)", field, message, code.value)
        self.items.append(ReconcileIssue(field=field, code=code, message=message))


# ---------------------------------------------------------------- lookups


def _block(source: Mapping[str, Any], *keys: str) -> Mapping[str, Any]:
    """First nested mapping found under ``keys``, else an empty mapping."""
    for key in keys:
        value = source.get(key)
        if isinstance(value, Mapping):
            return value
    return _EMPTY


def _lookup(source: Mapping[str, Any], keys: Iterable[str]) -> Any:
    for key in keys:
        if key in source and source[key] is not None:
            return source[key]
    return _MISSING


def _to_timestamp(value: Any) -> datetime | None:
    """Parse ISO strings, datetimes and epoch seconds/millis; naive -> UTC."""
    if value is None or value is _MISSING or isinstance(value, bool):
        return None
    try:
        if isinstance(value, datetime):
            ts = value
        elif isinstance(value, (int, float)):
            if not math.isfinite(value):
                return None
            seconds = value / 1000 if abs(value) > 1e11 else value
            ts = datetime.fromtimestamp(seconds, tz=timezone.utc)
        else:
            parsed = pd.Timestamp(value)
            if pd.isna(parsed):
                return None
            ts = parsed.to_pydatetime()
    except (ValueError, TypeError, OverflowError, OSError):
        return None
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts


def _resolve_number(
    rule: FieldRule,
    analysis_block: Mapping[str, Any],
    primary_block: Mapping[str, Any],
    issues: _IssueLog,
) -> float:
    sources = (
        ("analysis", analysis_block, rule.analysis_keys),
        ("primary", primary_block, rule.primary_keys),
    )
    for origin, block, keys in sources:
        raw = _lookup(block, keys)
        if raw is _MISSING:
            continue
        value = to_number(raw)
        if value is None:
            issues.add(rule.name, ErrorCode.MALFORMED_VALUE, f"non-numeric {origin} value {raw!r}")
            continue
        if not math.isfinite(value):
            issues.add(rule.name, ErrorCode.MALFORMED_NUMERIC, f"non-finite {origin} value clamped to 0")
            return 0.0
        if rule.non_negative and value < 0:
            issues.add(rule.name, ErrorCode.INVALID_RANGE, f"negative {origin} value clamped to 0")
            return sanitize_volatility(value)
        return value

    issues.add(rule.name, ErrorCode.MISSING_FIELD, f"defaulted to {rule.default}")
    return rule.default


def _optional_number(source: Mapping[str, Any], keys: Iterable[str]) -> float | None:
    value = to_number(_lookup(source, keys))
    if value is None or not math.isfinite(value):
        return None
    return value


def _number_or(source: Mapping[str, Any], key: str, fallback: float) -> float:
    value = _optional_number(source, (key,))
    return fallback if value is None else value


# ----------------------------------------------------------------- market


def _price_field(
    name: str,
    keys: tuple[str, ...],
    price_block: Mapping[str, Any],
    primary: Mapping[str, Any],
    issues: _IssueLog,
) -> float | None:
    """Reported price field, or None when absent/malformed."""
    for block in (price_block, primary):
        raw = _lookup(block, keys)
        if raw is _MISSING or isinstance(raw, Mapping):
            continue
        value = to_number(raw)
        if value is None:
            issues.add(name, ErrorCode.MALFORMED_VALUE, f"non-numeric value {raw!r}")
            continue
        if not math.isfinite(value):
            issues.add(name, ErrorCode.MALFORMED_NUMERIC, "non-finite value ignored")
            continue
        return value
    return None


def _build_market(primary: RawPayload, issues: _IssueLog) -> MarketRecord:
    price_block = _block(primary, "price", "market", "quote")

    def reported(name: str, *extra: str) -> float | None:
        return _price_field(name, _aliases(name, *extra), price_block, primary, issues)

    close = reported("close", "price", "last", "current_price")
    open_ = reported("open")
    high = reported("high", "day_high")
    low = reported("low", "day_low")
    volume = reported("volume")
    previous_close = reported("previous_close", "prev_close")
    change = reported("change")
    change_percent = reported("change_percent", "change_pct")

    if close is None:
        close = open_ if open_ is not None else 0.0
        issues.add("close", ErrorCode.MISSING_FIELD, f"defaulted to {close}")
    if open_ is None:
        open_ = previous_close if previous_close is not None else close
        issues.add("open", ErrorCode.MISSING_FIELD, f"defaulted to {open_}")
    if high is None:
        high = max(open_, close)
        issues.add("high", ErrorCode.MISSING_FIELD, "defaulted to max(open, close)")
    if low is None:
        low = min(open_, close)
        issues.add("low", ErrorCode.MISSING_FIELD, "defaulted to min(open, close)")
    if volume is None:
        volume = 0.0
        issues.add("volume", ErrorCode.MISSING_FIELD, "defaulted to 0")
    if change is None:
        change = close - open_
    if change_percent is None:
        change_percent = (close - open_) / open_ * 100 if open_ else 0.0
    if previous_close is None:
        # Approximation: the true previous-session close is never supplied.
        previous_close = open_
        issues.add("previous_close", ErrorCode.MISSING_FIELD, "approximated by open")

    symbol = _lookup(primary, ("symbol", "ticker"))
    if symbol is _MISSING:
        symbol = _lookup(price_block, ("symbol", "ticker"))
    if symbol is _MISSING:
        symbol = DEFAULT_SYMBOL

    timestamp = _to_timestamp(_lookup(price_block, ("timestamp", "time", "date")))
    if timestamp is None:
        timestamp = _to_timestamp(_lookup(primary, ("timestamp", "time")))

    def extra(name: str, *more: str) -> float | None:
        value = _optional_number(price_block, _aliases(name, *more))
        if value is None:
            value = _optional_number(primary, _aliases(name, *more))
        return value

    return MarketRecord(
        symbol=str(symbol),
        price=close,
        change=change,
        change_percent=change_percent,
        volume=volume,
        high=high,
        low=low,
        open=open_,
        previous_close=previous_close,
        timestamp=timestamp,
        market_cap=extra("market_cap"),
        pe_ratio=extra("pe_ratio"),
        week52_high=extra("week52_high", "fifty_two_week_high"),
        week52_low=extra("week52_low", "fifty_two_week_low"),
    )


# ------------------------------------------------------------- volatility


def _resolve_trend(
    analysis_block: Mapping[str, Any],
    primary_block: Mapping[str, Any],
    issues: _IssueLog,
) -> VolatilityTrend:
    for block in (analysis_block, primary_block):
        raw = _lookup(block, _TREND_KEYS)
        if raw is _MISSING:
            continue
        try:
            return VolatilityTrend(str(raw).strip().lower())
        except ValueError:
            issues.add("volatility_trend", ErrorCode.MALFORMED_VALUE, f"unknown trend {raw!r}")
    return VolatilityTrend(DEFAULT_VOLATILITY_TREND)


def _build_volatility(
    analysis_block: Mapping[str, Any],
    primary_block: Mapping[str, Any],
    fallback_timestamp: datetime | None,
    issues: _IssueLog,
) -> VolatilityRecord:
    values = {
        rule.name: _resolve_number(rule, analysis_block, primary_block, issues)
        for rule in VOLATILITY_RULES
    }

    implied: float | None = None
    for block in (analysis_block, primary_block):
        raw = _lookup(block, _IMPLIED_KEYS)
        if raw is _MISSING:
            continue
        number = to_number(raw)
        if number is None:
            issues.add("implied_volatility", ErrorCode.MALFORMED_VALUE, f"non-numeric value {raw!r}")
            continue
        implied = sanitize_volatility(number)
        break

    timestamp = (
        _to_timestamp(_lookup(analysis_block, ("timestamp",)))
        or _to_timestamp(_lookup(primary_block, ("timestamp",)))
        or fallback_timestamp
    )

    return VolatilityRecord(
        **values,
        volatility_trend=_resolve_trend(analysis_block, primary_block, issues),
        implied_volatility=implied,
        timestamp=timestamp,
    )


def _build_har(
    analysis_block: Mapping[str, Any],
    primary_block: Mapping[str, Any],
    issues: _IssueLog,
) -> HARForecast:
    values = {
        rule.name: _resolve_number(rule, analysis_block, primary_block, issues)
        for rule in HAR_RULES
    }
    timestamp = _to_timestamp(_lookup(analysis_block, ("timestamp",))) or _to_timestamp(
        _lookup(primary_block, ("timestamp",))
    )
    return HARForecast(**values, timestamp=timestamp)


# ------------------------------------------------------- signals/history


def _sequence(*candidates: Any) -> list[Any] | None:
    """First candidate that is a list, or a mapping wrapping one."""
    for value in candidates:
        if isinstance(value, Mapping):
            value = value.get("signals", value.get("data"))
        if isinstance(value, (list, tuple)):
            return list(value)
    return None


def _build_signals(
    analysis: Mapping[str, Any], primary: Mapping[str, Any], issues: _IssueLog,
) -> tuple[Signal, ...]:
    raw_signals = _sequence(analysis.get("signals"), primary.get("signals")) or []
    signals: list[Signal] = []
    for index, item in enumerate(raw_signals):
        label = f"signals[{index}]"
        if not isinstance(item, Mapping):
            issues.add(label, ErrorCode.MALFORMED_VALUE, "signal is not an object; dropped")
            continue

        strength = to_number(item.get("strength"))
        if strength is None or not math.isfinite(strength):
            issues.add(f"{label}.strength", ErrorCode.MALFORMED_NUMERIC, "defaulted to 0")
            strength = 0.0

        raw_id = to_number(item.get("id"))
        indicator = item.get("indicator")
        signals.append(Signal(
            type=str(item.get("type") or item.get("signal_type") or ""),
            strength=strength,
            message=str(item.get("message") or ""),
            timestamp=_to_timestamp(item.get("timestamp")),
            price=_optional_number(item, ("price",)),
            indicator=str(indicator) if indicator else None,
            id=int(raw_id) if raw_id is not None and math.isfinite(raw_id) else None,
        ))
    return tuple(signals)


def _build_history(
    analysis: Mapping[str, Any], primary: Mapping[str, Any], issues: _IssueLog,
) -> tuple[HistoricalPoint, ...]:
    raw_points = _sequence(
        analysis.get("historicalData"),
        analysis.get("historical_data"),
        primary.get("historicalData"),
        primary.get("historical_data"),
        primary.get("historical"),
    ) or []

    points: list[HistoricalPoint] = []
    for index, item in enumerate(raw_points):
        label = f"historical[{index}]"
        if not isinstance(item, Mapping):
            issues.add(label, ErrorCode.MALFORMED_VALUE, "point is not an object; dropped")
            continue
        when = _to_timestamp(_lookup(item, ("date", "timestamp")))
        close = _optional_number(item, ("close", "price"))
        if when is None or close is None:
            issues.add(label, ErrorCode.MISSING_FIELD, "point without date or close; dropped")
            continue

        volatility = None
        raw_vol = _lookup(item, _aliases("volatility") + _aliases("realized_volatility"))
        if raw_vol is not _MISSING:
            number = to_number(raw_vol)
            if number is not None:
                volatility = sanitize_volatility(number)

        points.append(HistoricalPoint(
            date=when,
            open=_number_or(item, "open", close),
            high=_number_or(item, "high", close),
            low=_number_or(item, "low", close),
            close=close,
            volume=_number_or(item, "volume", 0.0),
            volatility=volatility,
        ))

    points.sort(key=lambda p: p.date)
    return tuple(points)


# ------------------------------------------------------------------ entry


def reconcile_payload(payload: Payload) -> CanonicalRecord:
    """Reconcile an ingested payload into a :class:`CanonicalRecord`."""
    primary = payload.primary
    analysis = analysis_of(payload)
    issues = _IssueLog()

    primary_vol = _block(primary, "volatility", "volatilityData", "volatility_data")
    primary_har = _block(primary_vol, "har", "harModel", "har_model") or primary_vol

    market = _build_market(primary, issues)
    volatility = _build_volatility(
        _block(analysis, "volatilityIndicators", "volatility_indicators"),
        primary_vol,
        market.timestamp,
        issues,
    )
    har = _build_har(_block(analysis, "harModel", "har_model"), primary_har, issues)

    record = CanonicalRecord(
        market=market,
        volatility=volatility,
        har=har,
        signals=_build_signals(analysis, primary, issues),
        historical=_build_history(analysis, primary, issues),
        issues=tuple(issues.items),
    )
    if record.issues:
        logger.debug("reconciled %s with %d issue(s)", market.symbol, len(record.issues))
    return record


def reconcile(
    primary: RawPayload, analysis: RawPayload | None = None,
) -> CanonicalRecord:
    """Merge a primary payload and an optional analysis payload.

    Args:
        primary: Price payload, flat or with nested ``price``/``volatility``
            blocks. May embed the analysis payload under ``"analysis"``.
        analysis: Optional payload with ``volatilityIndicators``,
            ``harModel``, ``signals`` and ``historicalData`` blocks.

    Returns:
        The canonical record. Missing fields are filled from the defaults
        table; see ``CanonicalRecord.issues`` for what was repaired.
    """
    return reconcile_payload(ingest(primary, analysis))
