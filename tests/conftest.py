"""Shared fixtures: exchange-shaped kline rows and tickers."""

import pytest

from domain.candles import Timeframe

START_MS = 1_700_000_000_000
INTERVAL_MS = {
    Timeframe.DAILY: 86_400_000,
    Timeframe.H4: 14_400_000,
    Timeframe.H1: 3_600_000,
}


def make_rows(closes: list[float], interval_ms: int = 3_600_000, start_ms: int = START_MS) -> list[list[str]]:
    """Kline rows as the exchange returns them: numeric strings, newest first."""
    rows = []
    for i, close in enumerate(closes):
        rows.append([
            str(start_ms + i * interval_ms),
            str(close),
            str(close + 1.0),
            str(close - 1.0),
            str(close),
            "1000",
            str(close * 1000),
        ])
    return list(reversed(rows))


def make_ticker(price: float = 130.0) -> dict[str, str]:
    return {
        "lastPrice": str(price),
        "prevPrice24h": str(price - 2.0),
        "price24hPcnt": "0.025",
        "volume24h": "123456.5",
    }


def make_payload(n: int = 60, base: float = 100.0) -> dict:
    """Full per-symbol payload with a gently oscillating uptrend."""
    closes = [base + i * 0.5 + (i % 3) for i in range(n)]
    return {
        "ticker": make_ticker(closes[-1]),
        "klines": {
            tf.value: make_rows(closes, INTERVAL_MS[tf])
            for tf in (Timeframe.DAILY, Timeframe.H4, Timeframe.H1)
        },
    }


@pytest.fixture
def kline_rows():
    return make_rows([100.0 + i for i in range(60)], INTERVAL_MS[Timeframe.DAILY])


@pytest.fixture
def ticker_payload():
    return make_ticker()


@pytest.fixture
def symbol_payload():
    return make_payload()


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch, tmp_path):
    """Keep user config files and env overrides out of the tests."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("CRYPTODASH_WATCHLIST", raising=False)
    monkeypatch.delenv("CRYPTODASH_MAX_WORKERS", raising=False)
    monkeypatch.delenv("CRYPTODASH_KLINE_LIMIT", raising=False)
    monkeypatch.setattr("config.loader.CONFIG_PATHS", [tmp_path / "cryptodash.toml"])
