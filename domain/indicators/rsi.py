"""Relative Strength Index (RSI) indicator."""

from domain.indicators.utils import round2

NEUTRAL_RSI = 50.0


def rsi(closes: list[float], period: int = 14) -> float:
    """Calculate the most recent RSI using Wilder's smoothing method.

    Returns a single value on the 0-100 scale. Short history degrades to a
    neutral reading instead of failing.

    Args:
        closes: List of closing prices, oldest first
        period: RSI period (default: 14)

    Returns:
        RSI value (0-100) rounded to 2 decimals; 50.0 if fewer than
        period + 1 closes are given; exactly 100.0 when there are no losses

    Example:
        >>> prices = [44, 44.34, 44.09, 43.61, 44.33, 44.83, 45.10, 45.42,
        ...           45.84, 46.08, 45.89, 46.03, 45.61, 46.28, 46.28, 46.00]
        >>> 0 <= rsi(prices, 14) <= 100
        True
        >>> rsi(prices[:10], 14)
        50.0

    Notes:
        - Wilder's smoothing: New avg = (prev_avg * (period-1) + current) / period
        - Deltas after the first period are folded in strictly in order
    """
    if period <= 0:
        raise ValueError(f"RSI period must be positive, got {period}")

    if len(closes) < period + 1:
        return NEUTRAL_RSI

    # WHY: First average is simple average of the first 'period' deltas
    gains = 0.0
    losses = 0.0
    for i in range(1, period + 1):
        change = closes[i] - closes[i - 1]
        if change > 0:
            gains += change
        else:
            losses -= change

    avg_gain = gains / period
    avg_loss = losses / period

    for i in range(period + 1, len(closes)):
        change = closes[i] - closes[i - 1]
        gain = max(change, 0)
        loss = max(-change, 0)

        avg_gain = (avg_gain * (period - 1) + gain) / period
        avg_loss = (avg_loss * (period - 1) + loss) / period

    if avg_loss == 0:
        return 100.0

    rs = avg_gain / avg_loss
    return round2(100.0 - (100.0 / (1.0 + rs)))
