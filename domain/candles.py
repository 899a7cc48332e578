"""
Exchange candle parsing.

Converts raw kline rows and ticker payloads, as delivered by the exchange
REST/WebSocket API, into typed, chronologically ascending domain objects
that the indicator engines consume.
"""

from dataclasses import dataclass
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, Iterable, Mapping

from domain.indicators import OHLCSeries


class Timeframe(str, Enum):
    """Kline interval, valued by the exchange's interval code."""
    DAILY = "D"
    H4 = "240"
    H1 = "60"

    @property
    def label(self) -> str:
        return {"D": "daily", "240": "h4", "60": "h1"}[self.value]


class CandleParseError(ValueError):
    """Raised when a kline row or ticker payload cannot be parsed."""

    def __init__(self, message: str, index: int | None = None):
        self.index = index
        if index is not None:
            message = f"row {index}: {message}"
        super().__init__(message)


@dataclass(frozen=True)
class Candle:
    """Single OHLCV bar."""
    timestamp: datetime
    open: float
    high: float
    low: float
    close: float
    volume: float = 0.0
    turnover: float = 0.0


@dataclass(frozen=True)
class TickerData:
    """24h ticker fields used by the dashboard."""
    price: float
    previous_close: float
    change_24h: float  # percent
    volume_24h: float


@dataclass(frozen=True)
class SupportResistanceLevel:
    """Historical support/resistance price level."""
    date: date
    level: float


def _parse_row(row: Any, index: int) -> Candle:
    if not isinstance(row, (list, tuple)) or len(row) < 5:
        raise CandleParseError(f"expected at least 5 fields, got {row!r}", index=index)

    try:
        start_ms = int(row[0])
        open_, high, low, close = (float(v) for v in row[1:5])
        volume = float(row[5]) if len(row) > 5 else 0.0
        turnover = float(row[6]) if len(row) > 6 else 0.0
    except (TypeError, ValueError) as e:
        raise CandleParseError(f"non-numeric field: {e}", index=index) from e

    return Candle(
        timestamp=datetime.fromtimestamp(start_ms / 1000, tz=timezone.utc),
        open=open_,
        high=high,
        low=low,
        close=close,
        volume=volume,
        turnover=turnover,
    )


def parse_klines(rows: Iterable[Any]) -> list[Candle]:
    """
    Parse exchange kline rows into candles, oldest first.

    Rows are ``[startMs, open, high, low, close, volume, turnover]`` with
    numeric strings. The exchange returns them newest first; the output is
    sorted by start time regardless of input order.

    Raises:
        CandleParseError: If a row is malformed
    """
    candles = [_parse_row(row, i) for i, row in enumerate(rows)]
    return sorted(candles, key=lambda c: c.timestamp)


def closes(candles: list[Candle]) -> list[float]:
    """Closing prices, in candle order."""
    return [c.close for c in candles]


def to_ohlc(candles: list[Candle]) -> OHLCSeries:
    """High/low/close series for the stochastic and CCI engines."""
    return OHLCSeries(
        highs=[c.high for c in candles],
        lows=[c.low for c in candles],
        closes=[c.close for c in candles],
    )


def parse_ticker(payload: Mapping[str, Any]) -> TickerData:
    """
    Parse a 24h ticker payload.

    ``price24hPcnt`` is a fraction on the wire and is converted to percent.

    Raises:
        CandleParseError: If a required field is missing or non-numeric
    """
    try:
        return TickerData(
            price=float(payload["lastPrice"]),
            previous_close=float(payload["prevPrice24h"]),
            change_24h=float(payload["price24hPcnt"]) * 100,
            volume_24h=float(payload.get("volume24h", 0) or 0),
        )
    except KeyError as e:
        raise CandleParseError(f"ticker missing field {e}") from e
    except (TypeError, ValueError) as e:
        raise CandleParseError(f"ticker field not numeric: {e}") from e


def _parse_level_date(value: Any) -> date:
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value / 1000, tz=timezone.utc).date()
    parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc)
    return parsed.date()


def parse_levels(payload: Any) -> list[SupportResistanceLevel]:
    """
    Parse support/resistance levels.

    Accepts either a list of ``{"date": ..., "level": ...}`` items or the
    provider response wrapping them, ``{"data": [{"HISTORICAL_RESISTANCE_SUPPORT_LEVELS": [...]}]}``.
    Dates may be ISO strings or epoch milliseconds and are reduced to the
    UTC calendar date.

    Raises:
        CandleParseError: If the wrapper has no levels or an item is malformed
    """
    if isinstance(payload, Mapping):
        try:
            payload = payload["data"][0]["HISTORICAL_RESISTANCE_SUPPORT_LEVELS"]
        except (KeyError, IndexError, TypeError) as e:
            raise CandleParseError("no levels data") from e

    levels = []
    for i, item in enumerate(payload or []):
        try:
            levels.append(SupportResistanceLevel(
                date=_parse_level_date(item["date"]),
                level=float(item["level"]),
            ))
        except KeyError as e:
            raise CandleParseError(f"level missing field {e}", index=i) from e
        except (TypeError, ValueError, OverflowError, OSError) as e:
            raise CandleParseError(f"invalid level: {e}", index=i) from e
    return levels
