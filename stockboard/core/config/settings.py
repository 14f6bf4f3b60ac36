"""Configuration management for stockboard."""

import os
import tomllib
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from loguru import logger

from stockboard.core.exceptions import ConfigurationError


@dataclass
class DataConfig:
    """Where default datasets are fetched from."""

    base_url: str | None = None
    data_dir: str | None = None
    historical_path: str = "historical/{symbol}.csv"
    prediction_path: str = "predictions/{symbol}.csv"
    quotes_path: str = "stocks.csv"
    default_days: int = 90
    timeout: float = 10.0

    def __post_init__(self) -> None:
        if self.default_days < 0:
            raise ConfigurationError("default_days must be non-negative", {"default_days": self.default_days})
        if self.timeout <= 0:
            raise ConfigurationError("timeout must be positive", {"timeout": self.timeout})
        for name in ("historical_path", "prediction_path"):
            if "{symbol}" not in getattr(self, name):
                raise ConfigurationError(f"{name} must contain a {{symbol}} placeholder", {name: getattr(self, name)})


@dataclass
class LoggingConfig:
    """Logging settings."""

    level: str = "WARNING"
    file: str | None = None


@dataclass
class StockboardConfig:
    """Top level stockboard configuration."""

    data: DataConfig = field(default_factory=DataConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> "StockboardConfig":
        """Build a configuration from a nested dictionary."""
        try:
            data_config = DataConfig(**config_dict.get("data", {}))
            logging_config = LoggingConfig(**config_dict.get("logging", {}))
        except TypeError as exc:
            raise ConfigurationError(str(exc)) from exc
        return cls(data=data_config, logging=logging_config)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a nested dictionary."""
        return {
            "data": asdict(self.data),
            "logging": asdict(self.logging),
        }


class ConfigManager:
    """Loads configuration from a TOML file, layering environment overrides on top."""

    def __init__(self, config_path: Path | None = None):
        """Initialise the manager.

        Args:
            config_path: Path of the TOML file; defaults to ``~/.stockboard/config.toml``
        """
        self.config_path = config_path or Path.home() / ".stockboard" / "config.toml"
        self.config = self._load_config()

    def _load_config(self) -> StockboardConfig:
        config_dict: dict[str, Any] = {}
        if self.config_path.exists():
            try:
                with open(self.config_path, "rb") as f:
                    config_dict = tomllib.load(f)
            except (OSError, tomllib.TOMLDecodeError) as e:
                logger.warning(f"Failed to load config from {self.config_path}: {e}")
                config_dict = {}

        _deep_update(config_dict, load_config_from_env())
        return StockboardConfig.from_dict(config_dict)

    def get_config(self) -> StockboardConfig:
        """Return the active configuration."""
        return self.config

    def update_config(self, **updates: Any) -> None:
        """Apply nested updates, e.g. ``update_config(data={"default_days": 30})``."""
        config_dict = _deep_update(self.config.to_dict(), updates)
        self.config = StockboardConfig.from_dict(config_dict)


def _deep_update(d: dict[str, Any], u: dict[str, Any]) -> dict[str, Any]:
    for k, v in u.items():
        if isinstance(v, dict):
            d[k] = _deep_update(d.get(k, {}), v)
        else:
            d[k] = v
    return d


def get_default_config() -> StockboardConfig:
    """Return a configuration with every default applied."""
    return StockboardConfig()


def load_config_from_env() -> dict[str, Any]:
    """Read ``STOCKBOARD_*`` environment variables into a nested dictionary."""
    config: dict[str, Any] = {}

    data_config: dict[str, Any] = {}
    base_url = os.getenv("STOCKBOARD_DATA_BASE_URL")
    if base_url:
        data_config["base_url"] = base_url
    data_dir = os.getenv("STOCKBOARD_DATA_DIR")
    if data_dir:
        data_config["data_dir"] = data_dir
    default_days = os.getenv("STOCKBOARD_DEFAULT_DAYS")
    if default_days is not None:
        try:
            data_config["default_days"] = int(default_days)
        except ValueError as exc:
            raise ConfigurationError("STOCKBOARD_DEFAULT_DAYS must be an integer", {"value": default_days}) from exc
    timeout = os.getenv("STOCKBOARD_FETCH_TIMEOUT")
    if timeout is not None:
        try:
            data_config["timeout"] = float(timeout)
        except ValueError as exc:
            raise ConfigurationError("STOCKBOARD_FETCH_TIMEOUT must be a number", {"value": timeout}) from exc

    if data_config:
        config["data"] = data_config

    logging_config: dict[str, Any] = {}
    level = os.getenv("STOCKBOARD_LOG_LEVEL")
    if level is not None:
        logging_config["level"] = level
    log_file = os.getenv("STOCKBOARD_LOG_FILE")
    if log_file is not None:
        logging_config["file"] = log_file

    if logging_config:
        config["logging"] = logging_config

    return config
