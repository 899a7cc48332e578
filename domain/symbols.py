"""
Trading pair symbols and the watched-symbol session.

Symbols are displayed as ``BASE/QUOTE`` and sent to the exchange without
the slash. A ``WatchSession`` owns the set of watched pairs and is passed
explicitly to whoever needs it; there is no module-level registry.
"""

import logging
from typing import Iterable

logger = logging.getLogger(__name__)

QUOTE_ASSET_LENGTH = 4  # USDT

DEFAULT_SYMBOLS = [
    "BTC/USDT",
    "ETH/USDT",
    "SOL/USDT",
    "XRP/USDT",
    "MOTHER/USDT",
    "AAVE/USDT",
    "ENA/USDT",
]


def format_symbol_for_display(symbol: str) -> str:
    """
    Format an exchange symbol as ``BASE/QUOTE``.

    Example:
        >>> format_symbol_for_display("BTCUSDT")
        'BTC/USDT'
        >>> format_symbol_for_display("ETH/USDT")
        'ETH/USDT'
    """
    symbol = symbol.strip().upper()
    if "/" in symbol:
        return symbol
    if len(symbol) <= QUOTE_ASSET_LENGTH:
        raise ValueError(f"Invalid symbol format: {symbol}")
    return f"{symbol[:-QUOTE_ASSET_LENGTH]}/{symbol[-QUOTE_ASSET_LENGTH:]}"


def format_symbol_for_api(symbol: str) -> str:
    """
    Format a display symbol for exchange requests.

    Example:
        >>> format_symbol_for_api("BTC/USDT")
        'BTCUSDT'
    """
    return symbol.strip().upper().replace("/", "")


def symbol_id(symbol: str) -> str:
    """Lowercase identifier used as a record key, e.g. ``btcusdt``."""
    return format_symbol_for_api(symbol).lower()


class WatchSession:
    """Ordered, de-duplicated set of watched trading pairs."""

    def __init__(self, symbols: Iterable[str] | None = None):
        self._symbols: dict[str, None] = {}
        for symbol in DEFAULT_SYMBOLS if symbols is None else symbols:
            self.add(symbol)

    def __contains__(self, symbol: str) -> bool:
        return format_symbol_for_display(symbol) in self._symbols

    def __len__(self) -> int:
        return len(self._symbols)

    def add(self, symbol: str) -> bool:
        """Watch a symbol. Returns False if it was already watched."""
        display = format_symbol_for_display(symbol)
        if display in self._symbols:
            return False
        self._symbols[display] = None
        logger.debug(f"Watching {display}")
        return True

    def remove(self, symbol: str) -> bool:
        """Stop watching a symbol. Returns False if it was not watched."""
        display = format_symbol_for_display(symbol)
        if display not in self._symbols:
            return False
        del self._symbols[display]
        logger.debug(f"Stopped watching {display}")
        return True

    @property
    def symbols(self) -> list[str]:
        """Watched symbols in display form, in insertion order."""
        return list(self._symbols)

    @property
    def api_symbols(self) -> list[str]:
        return [format_symbol_for_api(s) for s in self._symbols]

    def subscription_topics(self, intervals: Iterable[str]) -> list[str]:
        """
        Stream topics for every watched symbol.

        One ``kline.<interval>.<SYMBOL>`` topic per interval and symbol,
        followed by one ``tickers.<SYMBOL>`` topic per symbol.
        """
        api_symbols = self.api_symbols
        topics = [
            f"kline.{interval}.{symbol}"
            for interval in intervals
            for symbol in api_symbols
        ]
        topics.extend(f"tickers.{symbol}" for symbol in api_symbols)
        return topics
