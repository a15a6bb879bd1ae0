"""Configuration layer: YAML file plus pydantic validation."""

from .errors import ConfigLoadError, ConfigValidationError
from .models import DEFAULT_CONFIG_FILE, CoverageConfig
from .loader import load_config, load_yaml, parse_config

__all__ = [
    "ConfigLoadError",
    "ConfigValidationError",
    "CoverageConfig",
    "DEFAULT_CONFIG_FILE",
    "load_config",
    "load_yaml",
    "parse_config",
]
