"""VolatilityEngine — one poll cycle from raw payloads to a dashboard view."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Mapping

import pandas as pd

from voltracker.config import EngineConfig
from voltracker.har import HARAssessment, evaluate_har
from voltracker.history import HistoryStats, annotate_history, har_components, history_stats
from voltracker.indicators import MarketCondition, RiskLevel, market_condition, risk_level
from voltracker.models.price_range import PriceRange
from voltracker.models.record import CanonicalRecord
from voltracker.models.signal import Signal
from voltracker.payloads import RawPayload, ingest
from voltracker.quality import ValidationResult, validate_record
from voltracker.ranges import project_range, project_standard_ranges
from voltracker.reconcile import reconcile_payload
from voltracker.signals import SignalFilter, SignalSummary, classify, summarize_signals

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DashboardView:
    """Everything the rendering layer needs for one refresh.

    Attributes:
        record: Reconciled market, volatility, HAR, signal and history data.
        har: HAR fit quality, dominant horizon and forecasts.
        ranges: Price bands keyed "intraday", "one_day", "five_day",
            "one_month".
        history: Annotated history window (see ``annotate_history``).
        history_stats: Summary of ``history``.
        signal_summary: Buy/sell/strong counts.
        risk_level: Realized-volatility risk bucket.
        market_condition: Realized vs. GARCH comparison.
        validation: Quality check results, when validation is enabled.
    """

    record: CanonicalRecord
    har: HARAssessment
    ranges: Mapping[str, PriceRange]
    history: pd.DataFrame = field(repr=False, compare=False)
    history_stats: HistoryStats
    signal_summary: SignalSummary
    risk_level: RiskLevel
    market_condition: MarketCondition
    validation: ValidationResult | None = None


class VolatilityEngine:
    """Central orchestrator: ingest -> reconcile -> validate -> derive.

    The engine keeps no state between calls apart from its configuration,
    so overlapping refreshes may share one instance.

    Usage::

        from voltracker import create_engine_from_env
        engine = create_engine_from_env()
        view = engine.build(summary_payload, analysis_payload)
        view.ranges["one_day"].upper
    """

    def __init__(self, config: EngineConfig | None = None) -> None:
        self.config = config or EngineConfig()

    # ----------------------------------------------------------------- build

    def build(
        self, primary: RawPayload | None, analysis: RawPayload | None = None,
    ) -> DashboardView:
        """Reconcile payloads and derive every dashboard value.

        Raises:
            VolatilityEngineError: ``UPSTREAM_UNAVAILABLE`` when ``primary``
                is missing. Malformed content inside the payloads never
                raises.
        """
        record = reconcile_payload(ingest(primary, analysis))

        validation: ValidationResult | None = None
        if self.config.validate:
            validation = validate_record(record)
            for check in validation.failed_checks:
                logger.warning(
                    "%s: quality check %s failed: %s",
                    record.market.symbol, check.name, check.message,
                )

        history = annotate_history(record.historical, config=self.config)
        har = evaluate_har(
            record.har,
            components=har_components(record.historical),
            tie_break=self.config.unit_tie_break,
        )

        return DashboardView(
            record=record,
            har=har,
            ranges=project_standard_ranges(
                record.volatility,
                record.market.price,
                record.market.open,
                config=self.config,
            ),
            history=history,
            history_stats=history_stats(history),
            signal_summary=summarize_signals(record.signals),
            risk_level=risk_level(record.volatility),
            market_condition=market_condition(record.volatility),
            validation=validation,
        )

    # ------------------------------------------------------------ per-call

    def project(
        self, annualized_vol: float, horizon_days: float, base_price: float,
    ) -> PriceRange:
        """``project_range`` with this engine's conventions."""
        return project_range(
            annualized_vol,
            horizon_days,
            base_price,
            trading_days=self.config.trading_days,
            multiplier=self.config.confidence_multiplier,
            tie_break=self.config.unit_tie_break,
        )

    def filter_signals(
        self, signals: Iterable[Signal], filter: SignalFilter | str = SignalFilter.ALL,
    ) -> list[Signal]:
        return classify(signals, filter)
