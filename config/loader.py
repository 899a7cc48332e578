"""
Configuration loader.

Settings are layered, lowest priority first:
1. Built-in defaults (config/schema.py)
2. The explicit TOML file, or the first one found on CONFIG_PATHS
3. CRYPTODASH_* environment variables
"""

import logging
import os
import tomllib
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from .schema import CryptoDashConfig

logger = logging.getLogger(__name__)

# Config file search paths (in priority order)
CONFIG_PATHS = [
    Path("cryptodash.toml"),
    Path(".cryptodash.toml"),
    Path.home() / ".config" / "cryptodash" / "config.toml",
]

ENV_PREFIX = "CRYPTODASH_"

# Env var suffix -> (TOML section, key); None section means top level
ENV_OVERRIDES: dict[str, tuple[str | None, str]] = {
    "WATCHLIST": (None, "watchlist"),
    "MAX_WORKERS": ("snapshot", "max_workers"),
    "KLINE_LIMIT": ("snapshot", "kline_limit"),
}


class ConfigError(Exception):
    """Unreadable or invalid configuration, naming where it came from."""

    def __init__(self, message: str, source: str | None = None, field: str | None = None):
        self.source = source
        self.field = field
        details = [f"{label}: {value}" for label, value in (("Source", source), ("Field", field)) if value]
        super().__init__(" | ".join([message, *details]))


def _resolve_path(config_path: Path | str | None) -> Path | None:
    if config_path:
        path = Path(config_path)
        if not path.exists():
            raise ConfigError(f"Config file not found: {path}", source=str(path))
        return path
    return next((p for p in CONFIG_PATHS if p.exists()), None)


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigError(f"Failed to parse TOML: {e}", source=str(path)) from e
    logger.info(f"Loaded config from: {path}")
    return data


def _apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    for suffix, (section, key) in ENV_OVERRIDES.items():
        raw = os.environ.get(f"{ENV_PREFIX}{suffix}")
        if not raw:
            continue

        value: Any = raw
        if key == "watchlist":
            value = [s.strip() for s in raw.split(",") if s.strip()]

        target = data.setdefault(section, {}) if section else data
        target[key] = value
        logger.debug(f"{ENV_PREFIX}{suffix} overrides {key}")
    return data


def load_config(config_path: Path | str | None = None) -> CryptoDashConfig:
    """
    Load and validate configuration.

    Args:
        config_path: Explicit path to a TOML file; searched for when omitted

    Raises:
        ConfigError: If the file is missing or unreadable, or a value fails
            validation (``field`` names the first offending setting)
    """
    path = _resolve_path(config_path)
    data = _apply_env_overrides(_read_toml(path) if path else {})

    try:
        return CryptoDashConfig(**data)
    except ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(loc) for loc in first.get("loc", ()))
        raise ConfigError(
            f"Invalid configuration: {first.get('msg', 'validation error')}",
            source=str(path) if path else None,
            field=field,
        ) from e
