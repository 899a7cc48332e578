"""
Tests for configuration loading and validation.
"""

import pytest

from config import ConfigError, CryptoDashConfig, load_config
from domain.candles import Timeframe


class TestSchema:
    def test_defaults(self):
        config = CryptoDashConfig()
        assert config.indicators.rsi_period == 14
        assert (config.indicators.macd_fast, config.indicators.macd_slow, config.indicators.macd_signal) == (12, 26, 9)
        assert config.indicators.stochastic_oversold == 20.0
        assert config.indicators.stochastic_overbought == 80.0
        assert config.indicators.cci_period == 20
        assert config.snapshot.timeframes == [Timeframe.DAILY, Timeframe.H4, Timeframe.H1]
        assert "BTC/USDT" in config.watchlist

    def test_watchlist_normalized(self):
        config = CryptoDashConfig(watchlist=["btcusdt", " eth/usdt "])
        assert config.watchlist == ["BTC/USDT", "ETH/USDT"]

    def test_macd_periods_validated(self):
        with pytest.raises(ValueError):
            CryptoDashConfig(indicators={"macd_fast": 26, "macd_slow": 12})

    def test_stochastic_zones_validated(self):
        with pytest.raises(ValueError):
            CryptoDashConfig(indicators={"stochastic_oversold": 80, "stochastic_overbought": 20})

    def test_timeframes_deduplicated(self):
        config = CryptoDashConfig(snapshot={"timeframes": ["D", "60", "D"]})
        assert config.snapshot.timeframes == [Timeframe.DAILY, Timeframe.H1]

    def test_empty_timeframes_rejected(self):
        with pytest.raises(ValueError):
            CryptoDashConfig(snapshot={"timeframes": []})


class TestLoader:
    def test_no_file_uses_defaults(self):
        assert load_config() == CryptoDashConfig()

    def test_toml_file(self, tmp_path):
        path = tmp_path / "custom.toml"
        path.write_text(
            'watchlist = ["BTCUSDT"]\n'
            "\n"
            "[indicators]\n"
            "rsi_period = 7\n"
            "\n"
            "[snapshot]\n"
            'timeframes = ["D", "240"]\n'
        )
        config = load_config(path)
        assert config.watchlist == ["BTC/USDT"]
        assert config.indicators.rsi_period == 7
        assert config.snapshot.timeframes == [Timeframe.DAILY, Timeframe.H4]

    def test_search_path(self, tmp_path):
        (tmp_path / "cryptodash.toml").write_text("[indicators]\ncci_period = 10\n")
        assert load_config().indicators.cci_period == 10

    def test_missing_explicit_file(self, tmp_path):
        with pytest.raises(ConfigError) as exc_info:
            load_config(tmp_path / "nope.toml")
        assert exc_info.value.source.endswith("nope.toml")

    def test_invalid_toml(self, tmp_path):
        path = tmp_path / "bad.toml"
        path.write_text("[indicators\n")
        with pytest.raises(ConfigError):
            load_config(path)

    def test_invalid_value_names_field(self, tmp_path):
        path = tmp_path / "bad.toml"
        path.write_text("[indicators]\nrsi_period = 0\n")
        with pytest.raises(ConfigError) as exc_info:
            load_config(path)
        assert exc_info.value.field == "indicators.rsi_period"
        assert "Field: indicators.rsi_period" in str(exc_info.value)

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("CRYPTODASH_WATCHLIST", "ethusdt, SOL/USDT")
        monkeypatch.setenv("CRYPTODASH_MAX_WORKERS", "8")
        config = load_config()
        assert config.watchlist == ["ETH/USDT", "SOL/USDT"]
        assert config.snapshot.max_workers == 8

    def test_env_overrides_toml(self, tmp_path, monkeypatch):
        (tmp_path / "cryptodash.toml").write_text("[snapshot]\nkline_limit = 200\nmax_workers = 2\n")
        monkeypatch.setenv("CRYPTODASH_KLINE_LIMIT", "50")
        config = load_config()
        assert config.snapshot.kline_limit == 50
        assert config.snapshot.max_workers == 2

    def test_invalid_env_value(self, monkeypatch):
        monkeypatch.setenv("CRYPTODASH_MAX_WORKERS", "0")
        with pytest.raises(ConfigError) as exc_info:
            load_config()
        assert exc_info.value.field == "snapshot.max_workers"
