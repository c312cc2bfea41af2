"""Shared fixtures for voltracker tests."""

from __future__ import annotations

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

# Ensure src/ is on the path for editable-style imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from voltracker.models.har import HARForecast
from voltracker.models.historical import HistoricalPoint
from voltracker.models.signal import Signal


@pytest.fixture
def primary_payload() -> dict:
    """Nested primary payload with a price block and volatility block."""
    return {
        "symbol": "SPY",
        "price": {
            "open": 500.0,
            "high": 507.5,
            "low": 498.25,
            "close": 505.0,
            "volume": 81_250_000,
            "timestamp": "2024-01-15T20:00:00Z",
        },
        "volatility": {
            "realized_volatility": 16.4,
            "garch_forecast": 17.2,
            "atr14": 31.5,
            "parkinson": 0.14,
            "garman_klass": 0.15,
            "trend": "increasing",
            "har_daily": 0.11,
        },
    }


@pytest.fixture
def analysis_payload() -> dict:
    return {
        "volatilityIndicators": {
            "realizedVolatility": 18.5,
            "garchForecast": 19.0,
            "volatilityTrend": "decreasing",
            "impliedVolatility": 21.3,
        },
        "harModel": {
            "daily": 0.09,
            "weekly": 0.21,
            "monthly": 0.43,
            "intercept": 0.002,
            "r_squared": 0.87,
            "mse": 0.0002,
            "forecast_1d": 0.12,
            "forecast_5d": 0.14,
            "forecast_22d": 0.16,
        },
        "signals": [
            {"type": "BUY", "strength": 0.82, "message": "RSI oversold", "indicator": "RSI"},
            {"type": "sell", "strength": 0.35, "message": "MACD cross"},
            {"type": "strong_buy", "strength": 0.7, "message": "Breakout", "price": 505.1},
        ],
        "historicalData": [
            {"date": "2024-01-12", "open": 498, "high": 503, "low": 497, "close": 502,
             "volume": 70_000_000, "volatility": 0.16},
            {"date": "2024-01-11", "open": 495, "high": 499, "low": 494, "close": 498,
             "volume": 65_000_000, "volatility": 0.17},
            {"date": "2024-01-15", "open": 502, "high": 507, "low": 500, "close": 505,
             "volume": 81_000_000, "volatility": 0.15},
        ],
    }


@pytest.fixture
def sample_har() -> HARForecast:
    return HARForecast(
        daily=0.09, weekly=0.21, monthly=0.43, intercept=0.001,
        r_squared=0.87, mse=0.0001,
        forecast_1d=0.0918, forecast_5d=0.2053, forecast_22d=0.4306,
    )


@pytest.fixture
def sample_signals() -> list[Signal]:
    return [
        Signal(type="BUY", strength=0.9, message="a"),
        Signal(type="sell", strength=0.2, message="b"),
        Signal(type="Strong Sell", strength=0.7, message="c"),
        Signal(type="hold", strength=0.5, message="d"),
        Signal(type="buy_the_dip", strength=0.69, message="e"),
    ]


@pytest.fixture
def sample_points() -> list[HistoricalPoint]:
    """30 daily points with alternating volatility."""
    base = datetime(2024, 1, 2, tzinfo=timezone.utc)
    points = []
    for i in range(30):
        close = 4700.0 + i * 5
        points.append(HistoricalPoint(
            date=base + timedelta(days=i),
            open=close - 3,
            high=close + 10,
            low=close - 12,
            close=close,
            volume=3_000_000_000 + i,
            volatility=0.16 if i % 2 else 0.18,
        ))
    return points
