"""Moving average indicators."""

from domain.indicators.errors import InsufficientDataError


def _check_period(values: list[float], period: int, indicator: str) -> None:
    if period <= 0:
        raise ValueError(f"{indicator} period must be positive, got {period}")
    if len(values) < period:
        raise InsufficientDataError(indicator, required=period, available=len(values))


def sma(values: list[float], period: int) -> list[float]:
    """Calculate Simple Moving Average.

    Args:
        values: List of values to calculate SMA over
        period: Number of periods for the moving average

    Returns:
        List of SMA values, one per position once ``period`` values exist.
        Length is ``len(values) - period + 1``.

    Raises:
        InsufficientDataError: If fewer than ``period`` values are given

    Example:
        >>> prices = [10, 11, 12, 13, 14, 15]
        >>> sma(prices, 3)
        [11.0, 12.0, 13.0, 14.0]
    """
    _check_period(values, period, "SMA")

    return [
        sum(values[i - period + 1:i + 1]) / period
        for i in range(period - 1, len(values))
    ]


def ema(values: list[float], period: int) -> list[float]:
    """Calculate Exponential Moving Average.

    Uses standard exponential smoothing with k = 2/(period+1), seeded with
    the SMA of the first ``period`` values.

    Args:
        values: List of values to calculate EMA over
        period: Number of periods for the moving average

    Returns:
        List of EMA values starting at the seed (anchored at index period-1).
        Length is ``len(values) - period + 1``.

    Raises:
        InsufficientDataError: If fewer than ``period`` values are given

    Example:
        >>> prices = [10, 11, 12, 13, 14, 15]
        >>> ema(prices, 3)
        [11.0, 12.0, 13.0, 14.0]
    """
    _check_period(values, period, "EMA")

    k = 2.0 / (period + 1)

    # WHY: First EMA value is SMA of first 'period' values
    result = [sum(values[:period]) / period]

    for i in range(period, len(values)):
        result.append(values[i] * k + result[-1] * (1 - k))

    return result
