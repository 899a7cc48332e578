from .candles import (
    Candle,
    CandleParseError,
    SupportResistanceLevel,
    TickerData,
    Timeframe,
    closes,
    parse_klines,
    parse_levels,
    parse_ticker,
    to_ohlc,
)
from .symbols import (
    DEFAULT_SYMBOLS,
    WatchSession,
    format_symbol_for_api,
    format_symbol_for_display,
    symbol_id,
)

__all__ = [
    # Candles
    "Candle",
    "CandleParseError",
    "SupportResistanceLevel",
    "TickerData",
    "Timeframe",
    "closes",
    "parse_klines",
    "parse_levels",
    "parse_ticker",
    "to_ohlc",
    # Symbols
    "DEFAULT_SYMBOLS",
    "WatchSession",
    "format_symbol_for_api",
    "format_symbol_for_display",
    "symbol_id",
]
