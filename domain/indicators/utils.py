"""Utility functions shared by the indicator engines."""

from typing import Sequence


def round2(value: float) -> float:
    """Round to 2 decimal places.

    Example:
        >>> round2(70.4567)
        70.46
    """
    return round(value, 2)


def last_two(series: Sequence[float]) -> tuple[float, float]:
    """Return the (previous, current) pair from the tail of a series.

    Example:
        >>> last_two([1.0, 2.0, 3.0])
        (2.0, 3.0)
    """
    if len(series) < 2:
        raise ValueError("series must have at least 2 values")
    return series[-2], series[-1]


def classify_cross(
    prev_a: float,
    prev_b: float,
    cur_a: float,
    cur_b: float,
) -> int:
    """Classify how series A moved relative to series B between two samples.

    Returns:
        1 if A crossed above B, -1 if A crossed below B, 0 otherwise

    Example:
        >>> classify_cross(9, 10, 11, 10)
        1
        >>> classify_cross(11, 10, 9, 10)
        -1
        >>> classify_cross(10, 10, 11, 10)
        0

    Notes:
        - Both comparisons are strict: touching B on either side is not a cross
    """
    if prev_a < prev_b and cur_a > cur_b:
        return 1
    if prev_a > prev_b and cur_a < cur_b:
        return -1
    return 0
