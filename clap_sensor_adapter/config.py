"""
Configuration loader for the clap sensor adapter.

Loads settings from config.yaml and resolves ${VAR} placeholders from the
environment.
"""

import os
from typing import Any, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load environment variables from .env file
load_dotenv()

VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class AdapterConfig(BaseModel):
    """Add-on identity configuration."""

    package_name: str = "clap-sensor-adapter"


class DetectorConfig(BaseModel):
    """Clap detection configuration."""

    provider: str = "pyaudio"
    sample_rate: int = Field(default=16000, gt=0)
    channels: int = Field(default=1, ge=1)
    frames_per_buffer: int = Field(default=1024, gt=0)
    threshold: float = Field(default=0.25, gt=0.0, le=1.0)
    min_interval_ms: int = Field(default=200, ge=0)
    device_index: Optional[int] = None


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    file: str = "./logs/clap_sensor.log"
    console: bool = True
    max_bytes: int = 1_048_576
    backup_count: int = 3
    third_party_level: str = "WARNING"

    @field_validator("level", "third_party_level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        if v.upper() not in VALID_LOG_LEVELS:
            raise ValueError(f"Invalid log level: {v}. Must be one of {VALID_LOG_LEVELS}")
        return v.upper()


class ClapSensorConfig(BaseModel):
    """Complete clap sensor adapter configuration."""

    adapter: AdapterConfig = Field(default_factory=AdapterConfig)
    detector: DetectorConfig = Field(default_factory=DetectorConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def _resolve_env_vars(data: Any) -> Any:
    """
    Recursively resolve environment variable placeholders in config data.

    Replaces ${VAR_NAME} with the value from os.environ; unknown variables
    are left as-is.
    """
    if isinstance(data, dict):
        return {k: _resolve_env_vars(v) for k, v in data.items()}
    elif isinstance(data, list):
        return [_resolve_env_vars(item) for item in data]
    elif isinstance(data, str) and data.startswith("${") and data.endswith("}"):
        env_var = data[2:-1]
        return os.getenv(env_var, data)
    return data


def load_config(config_path: Optional[str] = None) -> ClapSensorConfig:
    """
    Load and validate the adapter configuration.

    Reads from the provided path, the CLAP_SENSOR_CONFIG_PATH environment
    variable, or 'config.yaml', in that order.

    Args:
        config_path: Optional path to config file

    Returns:
        ClapSensorConfig: Validated configuration instance

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If config file is invalid YAML
        pydantic.ValidationError: If config doesn't match schema
    """
    if config_path is None:
        config_path = os.getenv("CLAP_SENSOR_CONFIG_PATH", "config.yaml")

    if not os.path.exists(config_path):
        raise FileNotFoundError(
            f"Configuration file not found: {config_path}. "
            f"Please ensure the file exists or set CLAP_SENSOR_CONFIG_PATH correctly."
        )

    with open(config_path, "r", encoding="utf-8") as f:
        raw_config = yaml.safe_load(f) or {}

    config_data = _resolve_env_vars(raw_config)

    return ClapSensorConfig(**config_data)
