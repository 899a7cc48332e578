"""
JSON API response types.

Structured responses for web API consumption.
Can be used with FastAPI, Flask, or any web framework.
"""

import math
from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from domain.candles import Candle, SupportResistanceLevel
from domain.indicators import MACDResult, StochasticResult
from orchestration.snapshot import MarketSnapshot, SnapshotBatch


def _finite(value: float | None) -> float | None:
    """Map NaN/inf sentinels to None so the output is valid JSON."""
    if value is None or math.isnan(value) or math.isinf(value):
        return None
    return value


# ============================================================================
# Response Models
# ============================================================================

class MACDResponse(BaseModel):
    """API response for a MACD computation."""
    macd_line: list[float] = Field(default_factory=list)
    signal_line: list[float] = Field(default_factory=list)
    histogram: list[float] = Field(default_factory=list)
    current_macd: float
    current_signal: float
    current_histogram: float
    trend: str
    cross_type: str | None = None


class StochasticResponse(BaseModel):
    """API response for the stochastic snapshot."""
    k: float
    d: float
    signal: str | None = None


class CandleResponse(BaseModel):
    """API response for one chart candle."""
    timestamp: datetime
    open: float
    high: float
    low: float
    close: float
    volume: float


class LevelResponse(BaseModel):
    """API response for a support/resistance level."""
    date: str  # YYYY-MM-DD
    level: float


class SnapshotResponse(BaseModel):
    """API response for one symbol."""
    id: str
    symbol: str
    price: float
    previous_close: float
    previous_week_close: float
    change_24h: float
    volume: float
    rsi: dict[str, float]
    macd: dict[str, MACDResponse]
    cci: dict[str, float | None]
    stochastic: StochasticResponse
    chart_data: list[CandleResponse] = Field(default_factory=list)
    levels: list[LevelResponse] = Field(default_factory=list)
    generated_at: datetime


class BatchResponse(BaseModel):
    """API response for a batch run."""
    snapshots: list[SnapshotResponse]
    failures: dict[str, str] = Field(default_factory=dict)
    fallbacks: list[str] = Field(default_factory=list)
    complete: bool
    generated_at: datetime


# ============================================================================
# Conversion Functions
# ============================================================================

def macd_to_response(result: MACDResult, include_series: bool = True) -> MACDResponse:
    """Convert MACDResult to API response."""
    return MACDResponse(
        macd_line=result.macd_line if include_series else [],
        signal_line=result.signal_line if include_series else [],
        histogram=result.histogram if include_series else [],
        current_macd=result.current_macd,
        current_signal=result.current_signal,
        current_histogram=result.current_histogram,
        trend=result.trend.value,
        cross_type=result.cross_type.value if result.cross_type else None,
    )


def stochastic_to_response(result: StochasticResult) -> StochasticResponse:
    """Convert StochasticResult to API response."""
    return StochasticResponse(
        k=result.k,
        d=result.d,
        signal=result.signal.value if result.signal else None,
    )


def candle_to_response(candle: Candle) -> CandleResponse:
    """Convert Candle to API response."""
    return CandleResponse(
        timestamp=candle.timestamp,
        open=candle.open,
        high=candle.high,
        low=candle.low,
        close=candle.close,
        volume=candle.volume,
    )


def level_to_response(level: SupportResistanceLevel) -> LevelResponse:
    """Convert SupportResistanceLevel to API response."""
    return LevelResponse(date=level.date.isoformat(), level=level.level)


def snapshot_to_response(snapshot: MarketSnapshot, include_series: bool = True) -> SnapshotResponse:
    """
    Convert MarketSnapshot to API response, keyed by timeframe label.

    ``include_series=False`` drops the MACD series and the chart candles.
    """
    return SnapshotResponse(
        id=snapshot.id,
        symbol=snapshot.symbol,
        price=snapshot.price,
        previous_close=snapshot.previous_close,
        previous_week_close=snapshot.previous_week_close,
        change_24h=snapshot.change_24h,
        volume=snapshot.volume,
        rsi={tf.label: value for tf, value in snapshot.rsi.items()},
        macd={tf.label: macd_to_response(r, include_series) for tf, r in snapshot.macd.items()},
        cci={tf.label: _finite(value) for tf, value in snapshot.cci.items()},
        stochastic=stochastic_to_response(snapshot.stochastic),
        chart_data=[candle_to_response(c) for c in snapshot.chart_data] if include_series else [],
        levels=[level_to_response(lv) for lv in snapshot.levels],
        generated_at=snapshot.generated_at,
    )


def batch_to_response(batch: SnapshotBatch, include_series: bool = True) -> BatchResponse:
    """Convert SnapshotBatch to API response."""
    return BatchResponse(
        snapshots=[snapshot_to_response(s, include_series) for s in batch.snapshots.values()],
        failures=batch.failures,
        fallbacks=batch.fallbacks,
        complete=batch.is_complete,
        generated_at=batch.completed_at or batch.started_at,
    )


def to_json(data: MarketSnapshot | SnapshotBatch, include_series: bool = True) -> dict[str, Any]:
    """
    Convert a snapshot or batch to a JSON-serializable dict.

    NaN readings are emitted as null.
    """
    if isinstance(data, SnapshotBatch):
        return batch_to_response(data, include_series).model_dump(mode="json")
    return snapshot_to_response(data, include_series).model_dump(mode="json")


def series_to_json(values: list[float]) -> list[float | None]:
    """Indicator series with NaN padding emitted as null."""
    return [_finite(v) for v in values]
