"""Momentum indicators."""

import logging
import math
from typing import Any, Mapping

from domain.indicators.base import OHLCSeries

logger = logging.getLogger(__name__)

CCI_CONSTANT = 0.015


def _extract_hlc(data: Any) -> tuple[Any, Any, Any]:
    """Pull high/low/close arrays out of a mapping, OHLCSeries or object."""
    if data is None:
        return None, None, None
    if isinstance(data, OHLCSeries):
        return data.highs, data.lows, data.closes
    if isinstance(data, Mapping):
        return data.get("high"), data.get("low"), data.get("close")
    return (
        getattr(data, "high", None),
        getattr(data, "low", None),
        getattr(data, "close", None),
    )


def cci(data: Any, period: int = 20) -> list[float]:
    """Calculate Commodity Channel Index.

    CCI = (Typical Price - SMA of Typical Price) / (0.015 * Mean Deviation)
    Typical Price = (High + Low + Close) / 3

    Malformed input degrades to "no data" instead of raising.

    Args:
        data: Mapping with 'high', 'low', 'close' lists (any may be missing),
            or an OHLCSeries
        period: CCI period (default: 20)

    Returns:
        List of CCI values aligned with the input truncated to its shortest
        array. Empty if any array is missing or empty, or if ``period`` is
        not positive.

    Example:
        >>> result = cci({"high": [102] * 25, "low": [98] * 25, "close": [100] * 25}, 20)
        >>> result[-1]
        0.0
        >>> cci({"high": None, "low": [1.0], "close": [1.0]})
        []

    Notes:
        - Returns NaN for first (period - 1) values
        - Returns all NaN when fewer than ``period`` aligned values exist
        - Zero mean deviation yields 0.0, not NaN or infinity
    """
    if period <= 0:
        logger.warning(f"Invalid CCI period: {period}")
        return []

    highs, lows, closes = _extract_hlc(data)

    if not highs or not lows or not closes:
        logger.warning("Invalid input data for CCI calculation: missing or empty arrays")
        return []

    length = min(len(highs), len(lows), len(closes))

    if length < period:
        logger.warning(f"Not enough data to calculate CCI: need {period}, got {length}")
        return [math.nan] * length

    typical_prices = [
        (highs[i] + lows[i] + closes[i]) / 3.0
        for i in range(length)
    ]

    result = [math.nan] * (period - 1)

    for i in range(period - 1, length):
        tp_window = typical_prices[i - period + 1:i + 1]

        sma_tp = sum(tp_window) / period
        mean_deviation = sum(abs(tp - sma_tp) for tp in tp_window) / period

        # WHY: Prevent division by zero
        if mean_deviation == 0:
            result.append(0.0)
        else:
            result.append((typical_prices[i] - sma_tp) / (CCI_CONSTANT * mean_deviation))

    return result


def last_cci(data: Any, period: int = 20) -> float:
    """Most recent CCI value, NaN when none can be computed."""
    values = cci(data, period)
    return values[-1] if values else math.nan
