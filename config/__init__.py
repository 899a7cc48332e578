from .loader import ConfigError, load_config
from .schema import CryptoDashConfig, IndicatorSettings, SnapshotSettings

__all__ = [
    "ConfigError",
    "load_config",
    "CryptoDashConfig",
    "IndicatorSettings",
    "SnapshotSettings",
]
