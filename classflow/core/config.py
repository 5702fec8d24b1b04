"""
Configuration for the Classflow engine.

Delays are expressed in logical time units; ``time_unit_seconds`` maps a unit
onto wall-clock seconds for the asyncio scheduler.
"""

import json
from pathlib import Path
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, Field, ValidationError as PydanticValidationError, model_validator

from .exceptions import ConfigurationError

AUTO_SUBMIT_DELAY = 500
AUTO_GRADE_DELAY = 500
PASS_THRESHOLD = 50
MIN_GRADE = 0
MAX_GRADE = 100
TIME_UNIT_SECONDS = 0.001


class Settings(BaseModel):
    """Validated engine settings."""
    auto_submit_delay: float = Field(AUTO_SUBMIT_DELAY, ge=0)
    auto_grade_delay: float = Field(AUTO_GRADE_DELAY, ge=0)
    pass_threshold: float = Field(PASS_THRESHOLD, ge=0, le=100)
    min_grade: int = Field(MIN_GRADE, ge=0, le=100)
    max_grade: int = Field(MAX_GRADE, ge=0, le=100)
    time_unit_seconds: float = Field(TIME_UNIT_SECONDS, gt=0)
    random_seed: Optional[int] = None
    log_level: str = Field("INFO", pattern=r'^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$')

    @model_validator(mode="after")
    def _check_grade_range(self) -> 'Settings':
        if self.min_grade > self.max_grade:
            raise ValueError("min_grade must not exceed max_grade")
        return self


DEFAULT_SETTINGS = Settings()


def load_settings(path: Optional[Union[str, Path]] = None,
                  overrides: Optional[Dict[str, Any]] = None) -> Settings:
    """Build settings from an optional JSON file plus keyword overrides."""
    config: Dict[str, Any] = {}

    if path:
        try:
            with open(path, 'r') as f:
                config = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Cannot read configuration file {path}: {e}",
                                     error_code="config_unreadable") from e
        if not isinstance(config, dict):
            raise ConfigurationError(f"Configuration file {path} must contain a JSON object",
                                     error_code="config_not_object")

    if overrides:
        config.update({key: value for key, value in overrides.items() if value is not None})

    try:
        return Settings(**config)
    except PydanticValidationError as e:
        raise ConfigurationError("Invalid configuration", error_code="config_invalid",
                                 details={'errors': e.errors()}) from e
