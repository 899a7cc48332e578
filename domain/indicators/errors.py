"""
Indicator error types.

Hard failures raised by the engines when a series is categorically too
short to produce a meaningful value. Soft degradations (RSI neutral value,
CCI NaN padding) are not errors and never raise.
"""

from typing import Any


class IndicatorError(Exception):
    """
    Base exception for indicator computation failures.

    Carries structured context for logging and serialization.
    """

    def __init__(
        self,
        message: str,
        indicator: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        self.indicator = indicator
        self.context = context or {}
        self.message = message

        parts = []
        if indicator:
            parts.append(f"[{indicator}]")
        parts.append(message)
        super().__init__(" ".join(parts))

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging/serialization."""
        return {
            "indicator": self.indicator,
            "message": self.message,
            "context": self.context,
        }


class InsufficientDataError(IndicatorError):
    """Raised when a series is shorter than the indicator's lookback."""

    def __init__(self, indicator: str, required: int, available: int):
        self.required = required
        self.available = available

        super().__init__(
            message=f"Not enough data points: need {required}, got {available}",
            indicator=indicator,
            context={"required": required, "available": available},
        )
