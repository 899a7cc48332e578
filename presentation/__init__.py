from .json_api import (
    BatchResponse,
    CandleResponse,
    LevelResponse,
    MACDResponse,
    SnapshotResponse,
    StochasticResponse,
    batch_to_response,
    candle_to_response,
    level_to_response,
    macd_to_response,
    series_to_json,
    snapshot_to_response,
    stochastic_to_response,
    to_json,
)

__all__ = [
    # Response models
    "BatchResponse",
    "CandleResponse",
    "LevelResponse",
    "MACDResponse",
    "SnapshotResponse",
    "StochasticResponse",
    # Conversion
    "batch_to_response",
    "candle_to_response",
    "level_to_response",
    "macd_to_response",
    "series_to_json",
    "snapshot_to_response",
    "stochastic_to_response",
    "to_json",
]
