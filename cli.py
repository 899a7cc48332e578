"""
CryptoDash CLI - indicator snapshots from exchange kline data.

Usage:
    python cli.py snapshot FILE [--format FORMAT] [--config PATH] [--no-series]
    python cli.py indicators FILE [--format FORMAT] [--config PATH]
    python cli.py symbols [--add SYMBOL] [--remove SYMBOL] [--topics]
"""

import argparse
import json
import logging
import math
import sys
from pathlib import Path
from typing import Any

from config import ConfigError, CryptoDashConfig, load_config
from domain import CandleParseError, WatchSession
from domain.indicators import InsufficientDataError, cci, ema, macd, rsi, stochastic
from orchestration.snapshot import compute_snapshots, parse_snapshot_input
from presentation.json_api import macd_to_response, series_to_json, stochastic_to_response, to_json

logger = logging.getLogger(__name__)


def _load_json(path: str) -> Any:
    try:
        return json.loads(Path(path).read_text())
    except (OSError, json.JSONDecodeError) as e:
        raise ValueError(f"Cannot read {path}: {e}") from e


def _fmt(value: float | None) -> str:
    if value is None or math.isnan(value):
        return "n/a"
    return f"{value:.2f}"


def cmd_snapshot(args: argparse.Namespace, config: CryptoDashConfig) -> int:
    """Compute snapshots for every symbol in a kline dump."""
    document = _load_json(args.file)
    symbols = document.get("symbols", {})
    if not symbols:
        print("Error: no symbols in input", file=sys.stderr)
        return 1

    inputs = []
    for symbol, payload in symbols.items():
        try:
            inputs.append(parse_snapshot_input(symbol, payload, config.snapshot.kline_limit))
        except (CandleParseError, ValueError) as e:
            logger.error(f"{symbol}: cannot parse input - {e}")

    batch = compute_snapshots(inputs, config)

    if args.format == "json":
        print(json.dumps(to_json(batch, include_series=not args.no_series), indent=2))
    else:
        for snapshot in batch.snapshots.values():
            print(f"\n{snapshot.symbol}  {snapshot.price:,.4f}  ({snapshot.change_24h:+.2f}%)")
            for tf in snapshot.rsi:
                result = snapshot.macd[tf]
                cross = f" {result.cross_type.value}" if result.cross_type else ""
                print(
                    f"  {tf.label:>5}  RSI {_fmt(snapshot.rsi[tf])}"
                    f"  MACD {_fmt(result.current_macd)}/{_fmt(result.current_signal)}"
                    f" {result.trend.value}{cross}"
                    f"  CCI {_fmt(snapshot.cci[tf])}"
                )
            stoch = snapshot.stochastic
            signal = f" {stoch.signal.value}" if stoch.signal else ""
            print(f"  Stochastic %K {_fmt(stoch.k)} %D {_fmt(stoch.d)}{signal}")
            if snapshot.levels:
                levels = ", ".join(_fmt(lv.level) for lv in sorted(snapshot.levels, key=lambda lv: lv.level))
                print(f"  Levels {levels}")

        for symbol, error in batch.failures.items():
            print(f"\n! {symbol}: {error}", file=sys.stderr)

    return 0 if batch.snapshots else 1


def cmd_indicators(args: argparse.Namespace, config: CryptoDashConfig) -> int:
    """Compute the core indicators from flat high/low/close arrays."""
    data = _load_json(args.file)
    closes = data.get("close") or []
    ind = config.indicators

    output: dict[str, Any] = {
        "rsi": rsi(closes, ind.rsi_period),
        "cci": series_to_json(cci(data, ind.cci_period)),
    }

    try:
        output["ema"] = ema(closes, args.ema_period)
    except InsufficientDataError as e:
        output["ema"] = None
        logger.warning(str(e))

    try:
        output["macd"] = macd_to_response(
            macd(closes, ind.macd_fast, ind.macd_slow, ind.macd_signal)
        ).model_dump(mode="json")
    except InsufficientDataError as e:
        output["macd"] = None
        logger.warning(str(e))

    try:
        output["stochastic"] = stochastic_to_response(stochastic(
            data.get("high") or [],
            data.get("low") or [],
            closes,
            period=ind.stochastic_period,
            smooth_k=ind.stochastic_smooth_k,
            smooth_d=ind.stochastic_smooth_d,
            oversold=ind.stochastic_oversold,
            overbought=ind.stochastic_overbought,
        )).model_dump(mode="json")
    except InsufficientDataError as e:
        output["stochastic"] = None
        logger.warning(str(e))

    if args.format == "json":
        print(json.dumps(output, indent=2))
    else:
        print(f"RSI({ind.rsi_period}): {_fmt(output['rsi'])}")
        if output["macd"]:
            m = output["macd"]
            cross = f" ({m['cross_type']})" if m["cross_type"] else ""
            print(f"MACD: {_fmt(m['current_macd'])} signal {_fmt(m['current_signal'])} "
                  f"hist {_fmt(m['current_histogram'])} {m['trend']}{cross}")
        if output["stochastic"]:
            s = output["stochastic"]
            print(f"Stochastic: %K {_fmt(s['k'])} %D {_fmt(s['d'])} {s['signal'] or ''}".rstrip())
        last = output["cci"][-1] if output["cci"] else None
        print(f"CCI({ind.cci_period}): {_fmt(last)}")

    return 0


def cmd_symbols(args: argparse.Namespace, config: CryptoDashConfig) -> int:
    """Show the watchlist and the stream topics it implies."""
    session = WatchSession(config.watchlist)
    for symbol in args.add or []:
        session.add(symbol)
    for symbol in args.remove or []:
        session.remove(symbol)

    for symbol in session.symbols:
        print(symbol)

    if args.topics:
        print()
        for topic in session.subscription_topics(tf.value for tf in config.snapshot.timeframes):
            print(topic)

    return 0


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="cryptodash",
        description="Crypto market indicator snapshots",
    )
    parser.add_argument("-c", "--config", help="Path to TOML config file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # Snapshot command
    snapshot_parser = subparsers.add_parser("snapshot", help="Per-symbol multi-timeframe snapshot")
    snapshot_parser.add_argument("file", help="JSON file with ticker and kline rows per symbol")
    snapshot_parser.add_argument(
        "-f", "--format",
        choices=["text", "json"],
        default="text",
        help="Output format",
    )
    snapshot_parser.add_argument("--no-series", action="store_true", help="Omit MACD series from JSON")
    snapshot_parser.set_defaults(func=cmd_snapshot)

    # Indicators command
    indicators_parser = subparsers.add_parser("indicators", help="Indicators for one OHLC series")
    indicators_parser.add_argument("file", help="JSON file with high, low, close arrays")
    indicators_parser.add_argument(
        "-f", "--format",
        choices=["text", "json"],
        default="text",
        help="Output format",
    )
    indicators_parser.add_argument("--ema-period", type=int, default=20, help="EMA period")
    indicators_parser.set_defaults(func=cmd_indicators)

    # Symbols command
    symbols_parser = subparsers.add_parser("symbols", help="Show watched symbols")
    symbols_parser.add_argument("--add", action="append", help="Symbol to add")
    symbols_parser.add_argument("--remove", action="append", help="Symbol to remove")
    symbols_parser.add_argument("--topics", action="store_true", help="Print stream topics")
    symbols_parser.set_defaults(func=cmd_symbols)

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    try:
        config = load_config(args.config)
        return args.func(args, config)
    except ConfigError as e:
        print(f"Config error: {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
