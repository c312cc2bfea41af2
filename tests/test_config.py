"""Tests for environment-driven configuration."""

import pytest

from voltracker import create_engine_from_env
from voltracker.config import EngineConfig, UnitConvention, config_from_env
from voltracker.errors import ErrorCode, VolatilityEngineError

_VARS = (
    "VOLTRACKER_UNIT_TIE_BREAK",
    "VOLTRACKER_TRADING_DAYS",
    "VOLTRACKER_CONFIDENCE_MULTIPLIER",
    "VOLTRACKER_INTRADAY_HORIZON",
    "VOLTRACKER_HISTORY_WINDOW",
    "VOLTRACKER_VALIDATE",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in _VARS:
        monkeypatch.delenv(name, raising=False)


class TestConfigFromEnv:
    def test_defaults(self):
        assert config_from_env() == EngineConfig()

    def test_overrides(self, monkeypatch):
        monkeypatch.setenv("VOLTRACKER_UNIT_TIE_BREAK", "Percent")
        monkeypatch.setenv("VOLTRACKER_TRADING_DAYS", "365")
        monkeypatch.setenv("VOLTRACKER_CONFIDENCE_MULTIPLIER", "1.96")
        monkeypatch.setenv("VOLTRACKER_INTRADAY_HORIZON", "0.5")
        monkeypatch.setenv("VOLTRACKER_HISTORY_WINDOW", "30")
        monkeypatch.setenv("VOLTRACKER_VALIDATE", "false")
        config = config_from_env()
        assert config.unit_tie_break is UnitConvention.PERCENT
        assert config.trading_days == 365
        assert config.confidence_multiplier == 1.96
        assert config.intraday_horizon_days == 0.5
        assert config.history_window == 30
        assert config.validate is False

    @pytest.mark.parametrize("name, value", [
        ("VOLTRACKER_UNIT_TIE_BREAK", "basis-points"),
        ("VOLTRACKER_TRADING_DAYS", "many"),
        ("VOLTRACKER_TRADING_DAYS", "0"),
        ("VOLTRACKER_HISTORY_WINDOW", "-1"),
    ])
    def test_invalid(self, monkeypatch, name, value):
        monkeypatch.setenv(name, value)
        with pytest.raises(VolatilityEngineError) as exc_info:
            config_from_env()
        assert exc_info.value.code is ErrorCode.INVALID_ARGUMENT

    def test_engine_factory(self, monkeypatch):
        monkeypatch.setenv("VOLTRACKER_TRADING_DAYS", "260")
        assert create_engine_from_env().config.trading_days == 260
