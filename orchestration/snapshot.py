"""
Market snapshot orchestration.

Coordinates the indicator engines for each watched symbol:
1. Parsing (raw klines/ticker -> candles)
2. Indicator computation per timeframe
3. Aggregation into one display record per symbol

Symbols are computed concurrently and independently. A failure in one
symbol never aborts the others; a cached snapshot may stand in for it when
the caller supplies one.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Iterable, Mapping

from config import CryptoDashConfig
from domain.candles import (
    Candle,
    CandleParseError,
    SupportResistanceLevel,
    TickerData,
    Timeframe,
    closes,
    parse_klines,
    parse_levels,
    parse_ticker,
    to_ohlc,
)
from domain.indicators import (
    IndicatorError,
    MACDResult,
    StochasticResult,
    last_cci,
    macd,
    rsi,
    stochastic,
)
from domain.symbols import format_symbol_for_display, symbol_id

logger = logging.getLogger(__name__)


class SnapshotError(Exception):
    """Raised when a symbol has no usable ticker or candle data."""

    def __init__(self, symbol: str, reason: str):
        self.symbol = symbol
        self.reason = reason
        super().__init__(f"[{symbol}] {reason}")


# ============================================================================
# Snapshot records
# ============================================================================

@dataclass(frozen=True)
class SnapshotInput:
    """Raw material for one symbol's snapshot."""
    symbol: str
    klines: dict[Timeframe, list[Candle]]
    ticker: TickerData | None
    levels: list[SupportResistanceLevel] = field(default_factory=list)


@dataclass(frozen=True)
class MarketSnapshot:
    """Display record for one symbol."""
    symbol: str
    id: str
    price: float
    previous_close: float
    previous_week_close: float
    change_24h: float
    volume: float
    rsi: dict[Timeframe, float]
    macd: dict[Timeframe, MACDResult]
    cci: dict[Timeframe, float]
    stochastic: StochasticResult
    chart_data: list[Candle] = field(default_factory=list)
    levels: list[SupportResistanceLevel] = field(default_factory=list)
    generated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class SymbolStatus(str, Enum):
    """Outcome of computing a single symbol."""
    OK = "ok"
    FALLBACK = "fallback"
    FAILED = "failed"


@dataclass
class SnapshotBatch:
    """Results and status of one batch run."""
    started_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    completed_at: datetime | None = None
    snapshots: dict[str, MarketSnapshot] = field(default_factory=dict)
    statuses: dict[str, SymbolStatus] = field(default_factory=dict)
    failures: dict[str, str] = field(default_factory=dict)
    fallbacks: list[str] = field(default_factory=list)

    @property
    def is_complete(self) -> bool:
        """True when every symbol was freshly computed."""
        return all(s == SymbolStatus.OK for s in self.statuses.values())

    @property
    def duration(self) -> timedelta | None:
        """Batch execution duration."""
        if self.completed_at:
            return self.completed_at - self.started_at
        return None

    def add_failure(self, symbol: str, error: Exception) -> None:
        logger.error(f"{symbol}: snapshot failed - {error}")
        self.failures[symbol] = str(error)
        self.statuses[symbol] = SymbolStatus.FAILED

    def add_fallback(self, symbol: str, snapshot: MarketSnapshot) -> None:
        logger.warning(f"{symbol}: serving cached snapshot from {snapshot.generated_at.isoformat()}")
        self.snapshots[symbol] = snapshot
        self.fallbacks.append(symbol)
        self.statuses[symbol] = SymbolStatus.FALLBACK


# ============================================================================
# Builders
# ============================================================================

def parse_snapshot_input(
    symbol: str,
    payload: Mapping[str, Any],
    kline_limit: int | None = None,
) -> SnapshotInput:
    """
    Build a SnapshotInput from a raw exchange payload.

    Payload shape: ``{"ticker": {...}, "klines": {"D": [...], "240": [...]},
    "levels": [...]}`` with kline rows exactly as the exchange returns them.
    ``levels`` is optional; unparseable levels are logged and dropped.

    Args:
        symbol: Symbol in either display or API form
        payload: Raw per-symbol payload
        kline_limit: Keep only the most recent candles per timeframe

    Raises:
        CandleParseError: If a kline row or the ticker is malformed
        ValueError: If a kline interval code is unknown
    """
    display = format_symbol_for_display(symbol)

    klines = {}
    for interval, rows in (payload.get("klines") or {}).items():
        candles = parse_klines(rows)
        klines[Timeframe(interval)] = candles[-kline_limit:] if kline_limit else candles

    ticker_payload = payload.get("ticker")
    ticker = parse_ticker(ticker_payload) if ticker_payload else None

    levels: list[SupportResistanceLevel] = []
    if payload.get("levels"):
        try:
            levels = parse_levels(payload["levels"])
        except CandleParseError as e:
            logger.warning(f"{display}: ignoring levels - {e}")

    return SnapshotInput(
        symbol=display,
        klines=klines,
        ticker=ticker,
        levels=levels,
    )


def build_snapshot(
    data: SnapshotInput,
    config: CryptoDashConfig | None = None,
) -> MarketSnapshot:
    """
    Compute every indicator for one symbol.

    RSI, MACD and CCI are computed per configured timeframe from that
    timeframe's candles; the stochastic snapshot uses the configured
    stochastic timeframe (daily by default).

    Raises:
        SnapshotError: If the ticker or the daily candles are missing
        InsufficientDataError: If a timeframe is too short for MACD or
            the stochastic timeframe is too short for the oscillator
    """
    config = config or CryptoDashConfig()
    ind = config.indicators

    daily = data.klines.get(Timeframe.DAILY) or []
    if data.ticker is None or not daily:
        raise SnapshotError(data.symbol, "no data available")

    rsi_values: dict[Timeframe, float] = {}
    macd_values: dict[Timeframe, MACDResult] = {}
    cci_values: dict[Timeframe, float] = {}

    for timeframe in config.snapshot.timeframes:
        candles = data.klines.get(timeframe) or []
        prices = closes(candles)

        rsi_values[timeframe] = rsi(prices, ind.rsi_period)
        macd_values[timeframe] = macd(
            prices,
            fast=ind.macd_fast,
            slow=ind.macd_slow,
            signal=ind.macd_signal,
        )
        cci_values[timeframe] = last_cci(to_ohlc(candles), ind.cci_period)

    stoch_candles = data.klines.get(config.snapshot.stochastic_timeframe) or []
    ohlc = to_ohlc(stoch_candles)
    stoch = stochastic(
        ohlc.highs,
        ohlc.lows,
        ohlc.closes,
        period=ind.stochastic_period,
        smooth_k=ind.stochastic_smooth_k,
        smooth_d=ind.stochastic_smooth_d,
        oversold=ind.stochastic_oversold,
        overbought=ind.stochastic_overbought,
    )

    return MarketSnapshot(
        symbol=data.symbol,
        id=symbol_id(data.symbol),
        price=data.ticker.price,
        previous_close=data.ticker.previous_close,
        previous_week_close=daily[-2].close if len(daily) >= 2 else 0.0,
        change_24h=data.ticker.change_24h,
        volume=data.ticker.volume_24h,
        rsi=rsi_values,
        macd=macd_values,
        cci=cci_values,
        stochastic=stoch,
        chart_data=list(data.klines.get(Timeframe.H1) or []),
        levels=list(data.levels),
    )


def compute_snapshots(
    inputs: Iterable[SnapshotInput],
    config: CryptoDashConfig | None = None,
    fallback: Mapping[str, MarketSnapshot] | None = None,
) -> SnapshotBatch:
    """
    Compute snapshots for many symbols concurrently.

    Args:
        inputs: One SnapshotInput per symbol
        config: Indicator and batch settings (defaults if omitted)
        fallback: Cached snapshots by symbol, served for symbols that fail

    Returns:
        SnapshotBatch with one entry per symbol in ``statuses``
    """
    config = config or CryptoDashConfig()
    fallback = fallback or {}
    batch = SnapshotBatch()

    unique: dict[str, SnapshotInput] = {}
    for item in inputs:
        if item.symbol in unique:
            logger.warning(f"{item.symbol}: duplicate input ignored")
            continue
        unique[item.symbol] = item

    with ThreadPoolExecutor(max_workers=config.snapshot.max_workers) as pool:
        futures = {
            item.symbol: pool.submit(build_snapshot, item, config)
            for item in unique.values()
        }

        for symbol, future in futures.items():
            try:
                batch.snapshots[symbol] = future.result()
                batch.statuses[symbol] = SymbolStatus.OK
            except (IndicatorError, SnapshotError) as e:
                batch.add_failure(symbol, e)
            except Exception as e:
                batch.add_failure(symbol, e)
                logger.debug(f"{symbol}: unexpected error", exc_info=True)

            if batch.statuses[symbol] == SymbolStatus.FAILED and symbol in fallback:
                batch.add_fallback(symbol, fallback[symbol])

    batch.completed_at = datetime.now(timezone.utc)
    logger.info(
        f"Computed {len(batch.snapshots) - len(batch.fallbacks)}/{len(unique)} snapshots "
        f"({len(batch.failures)} failed, {len(batch.fallbacks)} from cache)"
    )
    return batch
