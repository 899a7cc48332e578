"""Base types for technical indicator results."""

from dataclasses import dataclass
from enum import Enum


class Trend(str, Enum):
    """MACD trend classification."""
    BULLISH = "Bullish"
    BEARISH = "Bearish"


class CrossType(str, Enum):
    """MACD line crossing its signal line between the last two samples."""
    BULLISH_CROSS = "Bullish Cross"
    BEARISH_CROSS = "Bearish Cross"


class StochasticSignal(str, Enum):
    """Stochastic crossover inside an extreme zone."""
    BUY = "Buy"
    SELL = "Sell"


@dataclass(frozen=True)
class OHLCSeries:
    """High/low/close price series, oldest first.

    Attributes:
        highs: List of high prices
        lows: List of low prices
        closes: List of closing prices

    Example:
        >>> data = OHLCSeries(
        ...     highs=[102.0, 103.0, 104.0],
        ...     lows=[99.0, 100.0, 101.0],
        ...     closes=[101.0, 102.0, 103.0],
        ... )
    """
    highs: list[float]
    lows: list[float]
    closes: list[float]

    def __len__(self) -> int:
        return min(len(self.highs), len(self.lows), len(self.closes))


@dataclass(frozen=True)
class MACDResult:
    """Full MACD computation.

    ``macd_line`` is at full length (aligned to the slow EMA); ``signal_line``
    and ``histogram`` cover the tail of ``macd_line`` that the signal EMA
    overlaps, so index i of those two refers to the same time point.
    Current scalars are rounded to 2 decimals, series are not.
    """
    macd_line: list[float]
    signal_line: list[float]
    histogram: list[float]
    current_macd: float
    current_signal: float
    current_histogram: float
    trend: Trend
    cross_type: CrossType | None = None


@dataclass(frozen=True)
class StochasticResult:
    """Most recent smoothed %K / %D snapshot."""
    k: float
    d: float
    signal: StochasticSignal | None = None
