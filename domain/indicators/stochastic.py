"""Stochastic Oscillator indicator."""

from domain.indicators.base import StochasticResult, StochasticSignal
from domain.indicators.errors import InsufficientDataError
from domain.indicators.moving_averages import sma
from domain.indicators.utils import classify_cross, round2


def stochastic(
    highs: list[float],
    lows: list[float],
    closes: list[float],
    period: int = 14,
    smooth_k: int = 3,
    smooth_d: int = 3,
    oversold: float = 20.0,
    overbought: float = 80.0,
) -> StochasticResult:
    """Calculate the Stochastic Oscillator snapshot (%K, %D, signal).

    Raw %K = 100 * (Close - Lowest Low) / (Highest High - Lowest Low)
    Smoothed %K = SMA(Raw %K, smooth_k)
    %D = SMA(Smoothed %K, smooth_d)

    Args:
        highs: List of high prices, oldest first
        lows: List of low prices, oldest first
        closes: List of closing prices, oldest first
        period: Lookback period for raw %K (default: 14)
        smooth_k: SMA period applied to raw %K (default: 3)
        smooth_d: SMA period for %D (default: 3)
        oversold: Zone a Buy crossover must happen in (default: 20)
        overbought: Zone a Sell crossover must happen in (default: 80)

    Returns:
        StochasticResult with current smoothed %K and %D rounded to 2 decimals

    Raises:
        InsufficientDataError: If any series is shorter than ``period``, or
            too short to yield a single %D value

    Example:
        >>> highs = [50 + i for i in range(20)]
        >>> lows = [48 + i for i in range(20)]
        >>> closes = [49 + i for i in range(20)]
        >>> stochastic(highs, lows, closes).signal is None
        True

    Notes:
        - Buy: smoothed %K crosses above %D while below ``oversold``
        - Sell: smoothed %K crosses below %D while above ``overbought``
        - A crossover outside the zone, or a zone reading without a
          crossover, gives no signal
    """
    shortest = min(len(highs), len(lows), len(closes))
    if shortest < period:
        raise InsufficientDataError("Stochastic", required=period, available=shortest)

    required = period + smooth_k + smooth_d - 2
    if shortest < required:
        raise InsufficientDataError("Stochastic", required=required, available=shortest)

    # WHY: series are oldest first, so align on the most recent bars
    highs = highs[len(highs) - shortest:]
    lows = lows[len(lows) - shortest:]
    closes = closes[len(closes) - shortest:]

    raw_k = []
    for i in range(period - 1, shortest):
        highest_high = max(highs[i - period + 1:i + 1])
        lowest_low = min(lows[i - period + 1:i + 1])

        # WHY: Prevent division by zero in flat markets
        if highest_high == lowest_low:
            raw_k.append(50.0)
        else:
            raw_k.append(100.0 * (closes[i] - lowest_low) / (highest_high - lowest_low))

    smoothed_k = sma(raw_k, smooth_k)
    d_values = sma(smoothed_k, smooth_d)

    current_k = smoothed_k[-1]
    current_d = d_values[-1]

    if len(d_values) < 2:
        # No previous %D, so no crossover can be read yet
        return StochasticResult(k=round2(current_k), d=round2(current_d))

    previous_k = smoothed_k[-2]
    previous_d = d_values[-2]
    cross = classify_cross(previous_k, previous_d, current_k, current_d)
    signal = None
    if cross > 0 and current_k < oversold:
        signal = StochasticSignal.BUY
    elif cross < 0 and current_k > overbought:
        signal = StochasticSignal.SELL

    return StochasticResult(
        k=round2(current_k),
        d=round2(current_d),
        signal=signal,
    )
