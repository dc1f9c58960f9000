"""
Shared fixtures for dygraph_charts tests.
"""
import numpy as np
import pandas as pd
import pytest

from dygraph_charts import settings as settings_module


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """Keep user config files and env vars out of every test."""
    monkeypatch.delenv("DYGRAPH_CONFIG", raising=False)
    monkeypatch.delenv("DYGRAPH_OUTPUT_DIR", raising=False)
    monkeypatch.setattr(settings_module, "DEFAULT_CONFIG_PATHS", ())
    settings_module.reset_settings_for_tests()
    yield
    settings_module.reset_settings_for_tests()


@pytest.fixture
def spy_ohlc():
    """Daily OHLC prices with a DatetimeIndex, named like exported ticker data."""
    dates = pd.date_range("2024-01-01", periods=20, freq="D")
    np.random.seed(42)
    close = 470 + np.cumsum(np.random.randn(20))
    return pd.DataFrame(
        {
            "SPY.Close": close,
            "SPY.Open": close + 0.3,
            "SPY.Low": close - 1.0,
            "SPY.High": close + 1.0,
            "SPY.Volume": np.random.randint(1_000_000, 2_000_000, 20),
        },
        index=dates,
    )


@pytest.fixture
def spy_frame():
    """Close price plus two indicators in a plain table."""
    dates = pd.date_range("2024-01-01", periods=10, freq="D")
    close = np.linspace(100.0, 109.0, 10)
    return pd.DataFrame(
        {
            "date": dates,
            "SPY": close,
            "SPY.sma200": close - 2.0,
        }
    )
