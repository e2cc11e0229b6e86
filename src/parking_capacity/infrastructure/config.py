# File: src/parking_capacity/infrastructure/config.py
"""
Configuration and Logging for the Parking Capacity Service

Settings are plain pydantic models with defaults, optionally overridden
by a YAML file. The file is taken from an explicit path or from the
PARKING_CONFIG environment variable.

Example file:

    seeding:
      enabled: true
      random_seed: 42
      two_wheeler_range: [5, 30]
      four_wheeler_range: [5, 15]
    server:
      host: 0.0.0.0
      port: 8080
    logging:
      level: INFO
      file: logs/parking_service.log
"""

from typing import Optional, Tuple, Dict, Any, Union
from pathlib import Path
import logging
import os
import sys

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from ..domain.models import VehicleType


CONFIG_ENV_VAR = "PARKING_CONFIG"
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class ConfigurationError(Exception):
    """Raised when settings cannot be read or are invalid"""
    pass


# ============================================================================
# SETTINGS MODELS
# ============================================================================

class SeedingSettings(BaseModel):
    """How the store fills slots with synthetic vehicles at startup"""

    model_config = ConfigDict(extra="forbid")

    enabled: bool = True
    random_seed: Optional[int] = None
    two_wheeler_range: Tuple[int, int] = (5, 30)
    four_wheeler_range: Tuple[int, int] = (5, 15)

    @model_validator(mode="after")
    def validate_ranges(self) -> 'SeedingSettings':
        """Each range must be ordered and fit into one floor"""
        for vehicle_type, bounds in (
            (VehicleType.TWO_WHEELER, self.two_wheeler_range),
            (VehicleType.FOUR_WHEELER, self.four_wheeler_range),
        ):
            low, high = bounds
            if low < 0 or low > high:
                raise ValueError(f"Invalid {vehicle_type.value} seeding range: {bounds}")
            if high > vehicle_type.slots_per_floor:
                raise ValueError(
                    f"{vehicle_type.value} seeding range {bounds} exceeds "
                    f"{vehicle_type.slots_per_floor} slots per floor"
                )
        return self

    def range_for(self, vehicle_type: VehicleType) -> Tuple[int, int]:
        if vehicle_type == VehicleType.TWO_WHEELER:
            return self.two_wheeler_range
        return self.four_wheeler_range


class ServerSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    host: str = "0.0.0.0"
    port: int = Field(default=8080, ge=1, le=65535)


class LoggingSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    level: str = "INFO"
    file: Optional[str] = None

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {v}")
        return level


class ParkingSettings(BaseModel):
    """Top-level service settings"""

    model_config = ConfigDict(extra="forbid")

    seeding: SeedingSettings = Field(default_factory=SeedingSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'ParkingSettings':
        """Create settings from a (possibly empty) dictionary"""
        try:
            return cls(**(data or {}))
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e


# ============================================================================
# LOADING
# ============================================================================

def load_settings(path: Optional[Union[str, Path]] = None) -> ParkingSettings:
    """
    Load settings from a YAML file

    Args:
        path: Config file path. Falls back to $PARKING_CONFIG, then to defaults.

    Raises:
        ConfigurationError: if the file is missing, not YAML, or invalid
    """
    path = path or os.environ.get(CONFIG_ENV_VAR)
    if not path:
        return ParkingSettings()

    config_path = Path(path)
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigurationError(f"Cannot read config file {config_path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Config file {config_path} is not valid YAML: {e}") from e

    if data is not None and not isinstance(data, dict):
        raise ConfigurationError(f"Config file {config_path} must contain a mapping")

    return ParkingSettings.from_dict(data)


def setup_logging(settings: Optional[LoggingSettings] = None) -> logging.Logger:
    """Setup application logging configuration"""
    settings = settings or LoggingSettings()

    handlers = [logging.StreamHandler(sys.stdout)]
    if settings.file:
        log_path = Path(settings.file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path))

    logging.basicConfig(
        level=getattr(logging, settings.level),
        format=LOG_FORMAT,
        handlers=handlers,
        force=True
    )
    return logging.getLogger("parking_capacity")
