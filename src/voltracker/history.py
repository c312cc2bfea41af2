"""Historical series helpers — DataFrame view, predicted bands, HAR regressors."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import pandas as pd

from voltracker.config import EngineConfig
from voltracker.defaults import FALLBACK_POINT_VOLATILITY
from voltracker.har import HARComponents
from voltracker.models.historical import HistoricalPoint
from voltracker.ranges import project_range

COLUMNS = ["date", "open", "high", "low", "close", "volume", "volatility"]
BAND_COLUMNS = ["predicted_upper", "predicted_lower", "actual_in_range"]


@dataclass(frozen=True)
class HistoryStats:
    """Summary of an annotated history window.

    Attributes:
        period_days: Number of points in the window.
        price_change_pct: First-to-last close change in percent.
        band_accuracy_pct: Share of closes inside the previous point's band.
        latest_price: Last close.
        min_price: Lowest close.
        max_price: Highest close.
        avg_price: Mean close.
    """

    period_days: int
    price_change_pct: float | None = None
    band_accuracy_pct: float | None = None
    latest_price: float | None = None
    min_price: float | None = None
    max_price: float | None = None
    avg_price: float | None = None


def history_frame(points: Sequence[HistoricalPoint]) -> pd.DataFrame:
    """Points as a DataFrame sorted by date (missing volatility is NaN)."""
    if not points:
        return pd.DataFrame(columns=COLUMNS)
    records = [
        {
            "date": p.date,
            "open": p.open,
            "high": p.high,
            "low": p.low,
            "close": p.close,
            "volume": p.volume,
            "volatility": p.volatility,
        }
        for p in points
    ]
    df = pd.DataFrame(records, columns=COLUMNS)
    df["volatility"] = pd.to_numeric(df["volatility"], errors="coerce")
    return df.sort_values("date", kind="stable").reset_index(drop=True)


def annotate_history(
    points: Sequence[HistoricalPoint],
    window: int | None = None,
    config: EngineConfig | None = None,
) -> pd.DataFrame:
    """Attach one-day predicted bands to the most recent ``window`` points.

    Each point's band uses that point's own volatility (15% when missing or
    zero) and its close as the base price. ``actual_in_range`` tells whether
    the close landed inside the band predicted by the previous point; the
    first point of the window has no prior band and is False.
    """
    config = config or EngineConfig()
    window = window or config.history_window
    df = history_frame(points).tail(window).reset_index(drop=True)
    if df.empty:
        return pd.DataFrame(columns=COLUMNS + BAND_COLUMNS)

    vols = df["volatility"].fillna(0.0)
    vols = vols.where(vols > 0, FALLBACK_POINT_VOLATILITY)
    bands = [
        project_range(
            vol,
            1,
            close,
            trading_days=config.trading_days,
            multiplier=config.confidence_multiplier,
            tie_break=config.unit_tie_break,
        )
        for vol, close in zip(vols, df["close"])
    ]
    df["predicted_upper"] = [b.upper for b in bands]
    df["predicted_lower"] = [b.lower for b in bands]

    prev_upper = df["predicted_upper"].shift(1)
    prev_lower = df["predicted_lower"].shift(1)
    df["actual_in_range"] = (df["close"] >= prev_lower) & (df["close"] <= prev_upper)
    return df


def history_stats(frame: pd.DataFrame) -> HistoryStats:
    """Period length, price change, band hit rate and close statistics."""
    if frame.empty:
        return HistoryStats(period_days=0)

    closes = frame["close"].astype(float)
    first = float(closes.iloc[0])
    latest = float(closes.iloc[-1])
    change = (latest - first) / first * 100 if first else None

    accuracy = None
    if "actual_in_range" in frame.columns and len(frame) > 1:
        # The first row has no prior band to be judged against.
        accuracy = float(frame["actual_in_range"].iloc[1:].astype(bool).mean() * 100)

    return HistoryStats(
        period_days=len(frame),
        price_change_pct=change,
        band_accuracy_pct=accuracy,
        latest_price=latest,
        min_price=float(closes.min()),
        max_price=float(closes.max()),
        avg_price=float(closes.mean()),
    )


def har_components(points: Sequence[HistoricalPoint]) -> HARComponents | None:
    """HAR regressors from the last 1, 5 and 22 point volatilities.

    Averages are taken in the units the points report; the HAR evaluator
    normalizes them. Returns None when no point carries a volatility.
    """
    vols = history_frame(points)["volatility"].dropna()
    if vols.empty:
        return None
    return HARComponents(
        daily=float(vols.iloc[-1]),
        weekly=float(vols.tail(5).mean()),
        monthly=float(vols.tail(22).mean()),
    )
