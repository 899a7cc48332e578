"""MACD (Moving Average Convergence Divergence) indicator."""

from domain.indicators.base import CrossType, MACDResult, Trend
from domain.indicators.errors import InsufficientDataError
from domain.indicators.moving_averages import ema
from domain.indicators.utils import classify_cross, last_two, round2


def _classify_trend(current_histogram: float, macd_slope: float) -> Trend:
    histogram_positive = current_histogram > 0
    if histogram_positive and macd_slope > 0:
        return Trend.BULLISH
    if not histogram_positive and macd_slope < 0:
        return Trend.BEARISH
    # Slope disagrees with the histogram: histogram sign decides
    return Trend.BULLISH if current_histogram > 0 else Trend.BEARISH


def macd(
    closes: list[float],
    fast: int = 12,
    slow: int = 26,
    signal: int = 9
) -> MACDResult:
    """Calculate MACD indicator with trend and cross classification.

    MACD Line = EMA(fast) - EMA(slow), aligned to where EMA(slow) starts
    Signal Line = EMA(MACD Line, signal periods)
    Histogram = MACD Line (tail overlapping the signal line) - Signal Line

    Args:
        closes: List of closing prices, oldest first
        fast: Fast EMA period (default: 12)
        slow: Slow EMA period (default: 26)
        signal: Signal line EMA period (default: 9)

    Returns:
        MACDResult with full series, rounded current values, trend and cross

    Raises:
        InsufficientDataError: If fewer than slow + signal closes are given
        ValueError: If fast is not shorter than slow

    Example:
        >>> prices = [100 + 0.1 * i * i for i in range(40)]
        >>> result = macd(prices)
        >>> result.trend
        <Trend.BULLISH: 'Bullish'>
        >>> len(result.histogram) == len(result.signal_line)
        True

    Notes:
        - Cross compares the previous and current (MACD, signal) pairs
        - Trend is bullish on positive histogram with rising MACD, bearish on
          non-positive histogram with falling MACD, else follows histogram sign
    """
    if fast >= slow:
        raise ValueError(f"fast period ({fast}) must be shorter than slow period ({slow})")

    if len(closes) < slow + signal:
        raise InsufficientDataError("MACD", required=slow + signal, available=len(closes))

    fast_ema = ema(closes, fast)
    slow_ema = ema(closes, slow)

    # WHY: fast EMA starts (slow - fast) bars earlier than slow EMA
    aligned_fast = fast_ema[slow - fast:]
    macd_line = [f - s for f, s in zip(aligned_fast, slow_ema)]

    signal_line = ema(macd_line, signal)
    overlap = macd_line[-len(signal_line):]
    histogram = [m - s for m, s in zip(overlap, signal_line)]

    previous_macd, current_macd = last_two(macd_line)
    previous_signal, current_signal = last_two(signal_line)
    current_histogram = histogram[-1]

    cross = classify_cross(previous_macd, previous_signal, current_macd, current_signal)
    cross_type = None
    if cross > 0:
        cross_type = CrossType.BULLISH_CROSS
    elif cross < 0:
        cross_type = CrossType.BEARISH_CROSS

    return MACDResult(
        macd_line=macd_line,
        signal_line=signal_line,
        histogram=histogram,
        current_macd=round2(current_macd),
        current_signal=round2(current_signal),
        current_histogram=round2(current_histogram),
        trend=_classify_trend(current_histogram, current_macd - previous_macd),
        cross_type=cross_type,
    )
