"""Configuration management for commglass."""

from pathlib import Path
from typing import List, Optional

import yaml
from loguru import logger
from pydantic import BaseModel, Field, ValidationError, field_validator

from .errors import ConfigError


class SearchConfig(BaseModel):
    suggestion_limit: int = 6
    group_min_results: int = 4

    @field_validator('suggestion_limit', 'group_min_results')
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("must be at least 1")
        return v


class LoggingConfig(BaseModel):
    level: str = "INFO"
    file: Optional[Path] = None

    @field_validator('level')
    @classmethod
    def validate_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level: {v}")
        return level


class DataConfig(BaseModel):
    dataset_path: Optional[Path] = None
    presets_path: Optional[Path] = None

    @field_validator('dataset_path', 'presets_path')
    @classmethod
    def expand_path(cls, v: Optional[Path]) -> Optional[Path]:
        if v is None:
            return v
        return Path(v).expanduser()


class Config(BaseModel):
    """Main configuration for commglass."""

    search: SearchConfig = Field(default_factory=SearchConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    data: DataConfig = Field(default_factory=DataConfig)

    @staticmethod
    def default_locations() -> List[Path]:
        return [
            Path("commglass.yaml"),
            Path.home() / ".config" / "commglass" / "config.yaml",
        ]

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "Config":
        """
        Load configuration from YAML file.

        An explicit path must exist. Without one, the default locations are
        tried in order and built-in defaults are used when none exists.
        """
        if config_path is None:
            for candidate in cls.default_locations():
                if candidate.exists():
                    config_path = candidate
                    break
            else:
                logger.debug("No config file found, using defaults")
                return cls()

        config_path = Path(config_path)
        logger.info(f"Loading config from: {config_path}")
        try:
            with open(config_path, 'r') as f:
                data = yaml.safe_load(f) or {}
        except FileNotFoundError as e:
            raise ConfigError(f"Config file not found: {config_path}") from e
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"Config root must be a mapping: {config_path}")

        try:
            return cls(**data)
        except ValidationError as e:
            raise ConfigError(f"Invalid config in {config_path}: {e}") from e

    def save(self, config_path: Path) -> None:
        """Save configuration to YAML file."""
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, 'w') as f:
            yaml.safe_dump(self.model_dump(mode="json"), f, default_flow_style=False)
