"""
Configuration schema with validation.

All configuration is validated at load time using Pydantic.
"""

from pydantic import BaseModel, Field, field_validator

from domain.candles import Timeframe
from domain.symbols import DEFAULT_SYMBOLS, format_symbol_for_display


class IndicatorSettings(BaseModel):
    """Indicator periods and thresholds."""

    rsi_period: int = Field(default=14, ge=2, le=200)

    macd_fast: int = Field(default=12, ge=2, le=100)
    macd_slow: int = Field(default=26, ge=3, le=200)
    macd_signal: int = Field(default=9, ge=2, le=100)

    stochastic_period: int = Field(default=14, ge=2, le=200)
    stochastic_smooth_k: int = Field(default=3, ge=1, le=50)
    stochastic_smooth_d: int = Field(default=3, ge=1, le=50)
    stochastic_oversold: float = Field(default=20.0, ge=0.0, le=100.0)
    stochastic_overbought: float = Field(default=80.0, ge=0.0, le=100.0)

    cci_period: int = Field(default=20, ge=2, le=200)

    @field_validator("macd_slow")
    @classmethod
    def slow_gt_fast(cls, v: int, info) -> int:
        fast = info.data.get("macd_fast", 12)
        if v <= fast:
            raise ValueError("macd_slow must be greater than macd_fast")
        return v

    @field_validator("stochastic_overbought")
    @classmethod
    def overbought_gt_oversold(cls, v: float, info) -> float:
        oversold = info.data.get("stochastic_oversold", 20.0)
        if v <= oversold:
            raise ValueError("stochastic_overbought must be greater than stochastic_oversold")
        return v


class SnapshotSettings(BaseModel):
    """Snapshot batch configuration."""

    timeframes: list[Timeframe] = Field(default_factory=lambda: [
        Timeframe.DAILY, Timeframe.H4, Timeframe.H1,
    ])
    stochastic_timeframe: Timeframe = Field(default=Timeframe.DAILY)
    max_workers: int = Field(default=4, ge=1, le=64)
    kline_limit: int = Field(default=100, ge=10, le=1000, description="Most recent candles kept per timeframe")

    @field_validator("timeframes")
    @classmethod
    def timeframes_not_empty(cls, v: list[Timeframe]) -> list[Timeframe]:
        if not v:
            raise ValueError("at least one timeframe is required")
        return list(dict.fromkeys(v))


class CryptoDashConfig(BaseModel):
    """
    Root configuration model.

    All settings are validated on load.
    """

    # Trading pairs to track
    watchlist: list[str] = Field(default_factory=lambda: list(DEFAULT_SYMBOLS))

    # Subsections
    indicators: IndicatorSettings = Field(default_factory=IndicatorSettings)
    snapshot: SnapshotSettings = Field(default_factory=SnapshotSettings)

    @field_validator("watchlist")
    @classmethod
    def validate_symbols(cls, v: list[str]) -> list[str]:
        """Normalize symbols to BASE/QUOTE form."""
        validated = []
        for symbol in v:
            symbol = symbol.upper().strip()
            if not symbol or len(symbol) > 20:
                raise ValueError(f"Invalid symbol format: {symbol}")
            validated.append(format_symbol_for_display(symbol))
        return validated
