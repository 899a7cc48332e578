"""
Tests for the command line interface.
"""

import json

from cli import main
from conftest import make_payload


def _write(tmp_path, name, data):
    path = tmp_path / name
    path.write_text(json.dumps(data))
    return str(path)


class TestSnapshotCommand:
    def test_json(self, tmp_path, capsys):
        path = _write(tmp_path, "dump.json", {"symbols": {
            "BTCUSDT": make_payload(),
            "ETH/USDT": make_payload(n=20),
        }})

        assert main(["snapshot", path, "--format", "json", "--no-series"]) == 0

        data = json.loads(capsys.readouterr().out)
        assert [s["symbol"] for s in data["snapshots"]] == ["BTC/USDT"]
        assert "ETH/USDT" in data["failures"]

    def test_text(self, tmp_path, capsys):
        path = _write(tmp_path, "dump.json", {"symbols": {"BTC/USDT": make_payload()}})
        assert main(["snapshot", path]) == 0
        out = capsys.readouterr().out
        assert "BTC/USDT" in out
        assert "daily" in out
        assert "Stochastic" in out

    def test_nothing_computed(self, tmp_path):
        path = _write(tmp_path, "dump.json", {"symbols": {"BTC/USDT": make_payload(n=10)}})
        assert main(["snapshot", path]) == 1

    def test_unreadable_file(self, tmp_path, capsys):
        assert main(["snapshot", str(tmp_path / "missing.json")]) == 1
        assert "Cannot read" in capsys.readouterr().err


class TestIndicatorsCommand:
    def test_json(self, tmp_path, capsys):
        closes = [100.0 + 0.1 * i * i for i in range(40)]
        path = _write(tmp_path, "ohlc.json", {
            "high": [c + 1 for c in closes],
            "low": [c - 1 for c in closes],
            "close": closes,
        })

        assert main(["indicators", path, "-f", "json", "--ema-period", "5"]) == 0

        data = json.loads(capsys.readouterr().out)
        assert data["rsi"] == 100.0
        assert len(data["ema"]) == 36
        assert data["macd"]["trend"] == "Bullish"
        assert data["cci"][0] is None
        assert data["stochastic"]["k"] is not None

    def test_short_series_degrades(self, tmp_path, capsys):
        path = _write(tmp_path, "ohlc.json", {"high": [2.0], "low": [1.0], "close": [1.5]})
        assert main(["indicators", path, "-f", "json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["rsi"] == 50.0
        assert data["macd"] is None
        assert data["stochastic"] is None
        assert data["cci"] == [None]


class TestSymbolsCommand:
    def test_add_remove_topics(self, capsys):
        assert main(["symbols", "--add", "DOGEUSDT", "--remove", "BTC/USDT", "--topics"]) == 0
        out = capsys.readouterr().out.splitlines()
        assert "DOGE/USDT" in out
        assert "BTC/USDT" not in out
        assert "kline.D.DOGEUSDT" in out
        assert "tickers.DOGEUSDT" in out
