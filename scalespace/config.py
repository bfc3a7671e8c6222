from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from typing import Any, Dict
import logging
import yaml
import os

from .errors import invalid_config
from .obs.logging import StructuredLogger, setup_logging
from .units import is_length_unit

logger = logging.getLogger(__name__)
business_logger = StructuredLogger(__name__)


class LayoutConfig(BaseModel):
    coordinate_bound: int = 1000
    dimension: float = 1.0
    dimension_unit: str = "light_year"
    distance_precision: str = "single"  # single | double

    @field_validator('coordinate_bound')
    @classmethod
    def validate_bound(cls, v):
        if v < 1:
            raise ValueError("Coordinate bound must be positive")
        return v

    @field_validator('dimension')
    @classmethod
    def validate_dimension(cls, v):
        if not v > 0:
            raise ValueError("Dimension must be positive")
        return v

    @field_validator('dimension_unit')
    @classmethod
    def validate_dimension_unit(cls, v):
        if not is_length_unit(v):
            raise ValueError(f"Invalid dimension unit: {v}. Must be a unit of length")
        return v

    @field_validator('distance_precision')
    @classmethod
    def validate_precision(cls, v):
        allowed = ["single", "double"]
        if v not in allowed:
            raise ValueError(f"Invalid distance precision: {v}. Must be one of {allowed}")
        return v


class LoggingConfig(BaseModel):
    level: str = "INFO"
    json_format: bool = True

    @field_validator('level')
    @classmethod
    def validate_level(cls, v):
        allowed = ["DEBUG", "INFO", "WARNING", "ERROR"]
        if v.upper() not in allowed:
            raise ValueError(f"Invalid log level: {v}. Must be one of {allowed}")
        return v.upper()


class AppConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")  # Prevent unexpected config keys

    layout: LayoutConfig = LayoutConfig()
    logging: LoggingConfig = LoggingConfig()


def _env_bool(name: str) -> bool:
    return os.environ[name].lower() in ("1", "true", "yes")


def load_config(path: str = "scalespace.yaml") -> AppConfig:
    """Load configuration from YAML file with environment variable overrides."""
    try:
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        logger.warning(f"Config file {path} not found, using defaults")
        data = {}
    except yaml.YAMLError as e:
        raise invalid_config(f"Invalid YAML in config file {path}: {e}")

    if not isinstance(data, dict):
        raise invalid_config(f"Config file {path} must contain a mapping, got {type(data).__name__}")

    env_overrides: Dict[str, Any] = {}

    # Layout overrides
    if "SCALESPACE_COORDINATE_BOUND" in os.environ:
        env_overrides.setdefault("layout", {})["coordinate_bound"] = os.environ["SCALESPACE_COORDINATE_BOUND"]
    if "SCALESPACE_DIMENSION" in os.environ:
        env_overrides.setdefault("layout", {})["dimension"] = os.environ["SCALESPACE_DIMENSION"]
    if "SCALESPACE_DIMENSION_UNIT" in os.environ:
        env_overrides.setdefault("layout", {})["dimension_unit"] = os.environ["SCALESPACE_DIMENSION_UNIT"]
    if "SCALESPACE_DISTANCE_PRECISION" in os.environ:
        env_overrides.setdefault("layout", {})["distance_precision"] = os.environ["SCALESPACE_DISTANCE_PRECISION"]

    # Logging overrides
    if "SCALESPACE_LOG_LEVEL" in os.environ:
        env_overrides.setdefault("logging", {})["level"] = os.environ["SCALESPACE_LOG_LEVEL"]
    if "SCALESPACE_LOG_JSON" in os.environ:
        env_overrides.setdefault("logging", {})["json_format"] = _env_bool("SCALESPACE_LOG_JSON")

    def merge_dict(base, override):
        for key, value in override.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                merge_dict(base[key], value)
            else:
                base[key] = value

    merge_dict(data, env_overrides)

    try:
        return AppConfig(**data)
    except ValidationError as e:
        raise invalid_config(str(e))


def describe_config(config: AppConfig) -> Dict[str, Any]:
    """Flat summary of the effective configuration for startup logs."""
    return {
        "coordinate_bound": config.layout.coordinate_bound,
        "dimension": f"{config.layout.dimension} {config.layout.dimension_unit}",
        "distance_precision": config.layout.distance_precision,
        "log_level": config.logging.level,
        "log_json": config.logging.json_format,
    }


def configure(path: str = "scalespace.yaml") -> AppConfig:
    """
    Load configuration, set up logging from it and log the effective settings.

    This is the single startup entry point: the ``logging`` section (and its
    ``SCALESPACE_LOG_*`` overrides) only takes effect through here.
    """
    config = load_config(path)

    setup_logging(level=config.logging.level, enable_json=config.logging.json_format)
    business_logger.startup_event(
        "configuration", "ready",
        details={"config_path": path, **describe_config(config)}
    )
    return config
