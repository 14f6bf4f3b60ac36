"""Configuration management module."""

from stockboard.core.config.settings import (
    ConfigManager,
    DataConfig,
    LoggingConfig,
    StockboardConfig,
    get_default_config,
    load_config_from_env,
)

__all__ = [
    "ConfigManager",
    "DataConfig",
    "LoggingConfig",
    "StockboardConfig",
    "get_default_config",
    "load_config_from_env",
]
