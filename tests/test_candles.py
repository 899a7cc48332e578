"""
Unit tests for candle parsing and symbol handling.
"""

import pytest
from datetime import date, timezone

from domain import (
    CandleParseError,
    Timeframe,
    WatchSession,
    closes,
    format_symbol_for_api,
    format_symbol_for_display,
    parse_klines,
    parse_levels,
    parse_ticker,
    symbol_id,
    to_ohlc,
)


class TestParseKlines:
    """Tests for kline row parsing."""

    def test_sorted_oldest_first(self, kline_rows):
        candles = parse_klines(kline_rows)
        assert len(candles) == 60
        assert candles[0].close == 100.0
        assert candles[-1].close == 159.0
        assert all(a.timestamp < b.timestamp for a, b in zip(candles, candles[1:]))
        assert candles[0].timestamp.tzinfo == timezone.utc

    def test_fields(self):
        candles = parse_klines([["1700000000000", "1.5", "2.5", "0.5", "2.0", "10", "20"]])
        candle = candles[0]
        assert (candle.open, candle.high, candle.low, candle.close) == (1.5, 2.5, 0.5, 2.0)
        assert candle.volume == 10.0
        assert candle.turnover == 20.0

    def test_optional_volume(self):
        candle = parse_klines([[1700000000000, 1, 2, 0.5, 1.5]])[0]
        assert candle.volume == 0.0

    def test_short_row(self):
        with pytest.raises(CandleParseError) as exc_info:
            parse_klines([["1700000000000", "1", "2"]])
        assert exc_info.value.index == 0

    def test_non_numeric(self):
        rows = [["1700000000000", "1", "2", "0.5", "1.5"], ["1700000060000", "x", "2", "0.5", "1.5"]]
        with pytest.raises(CandleParseError) as exc_info:
            parse_klines(rows)
        assert exc_info.value.index == 1
        assert isinstance(exc_info.value, ValueError)

    def test_series_helpers(self, kline_rows):
        candles = parse_klines(kline_rows)
        ohlc = to_ohlc(candles)
        assert closes(candles) == ohlc.closes
        assert ohlc.highs[0] == 101.0
        assert ohlc.lows[0] == 99.0
        assert len(ohlc) == 60


class TestParseTicker:
    """Tests for ticker parsing."""

    def test_fields(self, ticker_payload):
        ticker = parse_ticker(ticker_payload)
        assert ticker.price == 130.0
        assert ticker.previous_close == 128.0
        assert ticker.change_24h == pytest.approx(2.5)
        assert ticker.volume_24h == 123456.5

    def test_missing_field(self):
        with pytest.raises(CandleParseError):
            parse_ticker({"lastPrice": "1"})

    def test_non_numeric(self, ticker_payload):
        ticker_payload["lastPrice"] = "n/a"
        with pytest.raises(CandleParseError):
            parse_ticker(ticker_payload)


class TestParseLevels:
    """Tests for support/resistance level parsing."""

    def test_plain_list(self):
        levels = parse_levels([
            {"date": "2024-03-01T12:00:00.000Z", "level": 61250.5},
            {"date": "2024-02-15", "level": "58000"},
        ])
        assert [(lv.date, lv.level) for lv in levels] == [
            (date(2024, 3, 1), 61250.5),
            (date(2024, 2, 15), 58000.0),
        ]

    def test_provider_response(self):
        payload = {"data": [{"HISTORICAL_RESISTANCE_SUPPORT_LEVELS": [
            {"date": 1_700_000_000_000, "level": 35000},
        ]}]}
        levels = parse_levels(payload)
        assert levels[0].date == date(2023, 11, 14)
        assert levels[0].level == 35000.0

    def test_response_without_levels(self):
        with pytest.raises(CandleParseError):
            parse_levels({"data": []})

    def test_malformed_item(self):
        with pytest.raises(CandleParseError) as exc_info:
            parse_levels([{"date": "2024-01-01", "level": 1.0}, {"date": "yesterday", "level": 2.0}])
        assert exc_info.value.index == 1

        with pytest.raises(CandleParseError):
            parse_levels([{"level": 1.0}])


class TestTimeframe:
    def test_codes(self):
        assert Timeframe("D") is Timeframe.DAILY
        assert Timeframe("240").label == "h4"
        assert Timeframe.H1.label == "h1"


class TestSymbols:
    """Tests for symbol formatting and the watch session."""

    def test_format_for_display(self):
        assert format_symbol_for_display("BTCUSDT") == "BTC/USDT"
        assert format_symbol_for_display("mother/usdt") == "MOTHER/USDT"
        with pytest.raises(ValueError):
            format_symbol_for_display("USDT")

    def test_format_for_api(self):
        assert format_symbol_for_api("ETH/USDT") == "ETHUSDT"
        assert symbol_id("ETH/USDT") == "ethusdt"

    def test_default_session(self):
        session = WatchSession()
        assert session.symbols[0] == "BTC/USDT"
        assert len(session) == 7

    def test_add_remove(self):
        session = WatchSession([])
        assert session.add("SOLUSDT") is True
        assert session.add("SOL/USDT") is False
        assert "SOLUSDT" in session
        assert session.symbols == ["SOL/USDT"]
        assert session.remove("SOL/USDT") is True
        assert session.remove("SOL/USDT") is False
        assert len(session) == 0

    def test_sessions_are_independent(self):
        first = WatchSession(["BTC/USDT"])
        second = WatchSession(["BTC/USDT"])
        first.add("ETH/USDT")
        assert second.symbols == ["BTC/USDT"]

    def test_subscription_topics(self):
        session = WatchSession(["BTC/USDT", "ETH/USDT"])
        topics = session.subscription_topics(["D", "60"])
        assert topics == [
            "kline.D.BTCUSDT",
            "kline.D.ETHUSDT",
            "kline.60.BTCUSDT",
            "kline.60.ETHUSDT",
            "tickers.BTCUSDT",
            "tickers.ETHUSDT",
        ]
