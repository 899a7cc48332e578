"""Technical indicators library for the crypto market dashboard.

This package provides pure Python, stateless implementations of the
indicators shown on the dashboard. Every function is a pure function of its
inputs and is safe to call concurrently.

Indicators:
    - EMA / SMA: Moving averages (trimmed to the positions with full history)
    - RSI: Relative Strength Index using Wilder's smoothing (scalar)
    - MACD: Line, signal, histogram, trend and cross classification
    - Stochastic: Smoothed %K / %D snapshot with Buy/Sell detection
    - CCI: Commodity Channel Index series with NaN padding
    - Utils: Cross classification, rounding

Example:
    >>> from domain.indicators import rsi, macd, stochastic, cci
    >>>
    >>> closes = [100 + 0.1 * i * i for i in range(40)]
    >>>
    >>> rsi(closes, period=14)
    100.0
    >>> result = macd(closes)
    >>> result.trend.value
    'Bullish'
"""

from domain.indicators.base import (
    CrossType,
    MACDResult,
    OHLCSeries,
    StochasticResult,
    StochasticSignal,
    Trend,
)
from domain.indicators.errors import IndicatorError, InsufficientDataError
from domain.indicators.macd import macd
from domain.indicators.momentum import cci, last_cci
from domain.indicators.moving_averages import ema, sma
from domain.indicators.rsi import NEUTRAL_RSI, rsi
from domain.indicators.stochastic import stochastic
from domain.indicators.utils import classify_cross, last_two, round2

__all__ = [
    # Base types
    "OHLCSeries",
    "MACDResult",
    "StochasticResult",
    "Trend",
    "CrossType",
    "StochasticSignal",
    # Errors
    "IndicatorError",
    "InsufficientDataError",
    # Moving averages
    "sma",
    "ema",
    # Oscillators
    "rsi",
    "NEUTRAL_RSI",
    "macd",
    "stochastic",
    "cci",
    "last_cci",
    # Utilities
    "classify_cross",
    "last_two",
    "round2",
]
