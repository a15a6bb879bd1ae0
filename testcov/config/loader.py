"""YAML loading and parsing for testcov configuration."""

from pathlib import Path

import yaml
from pydantic import ValidationError

from .errors import ConfigLoadError, ConfigValidationError
from .models import DEFAULT_CONFIG_FILE, CoverageConfig


def load_yaml(path: str | Path) -> dict:
    """Load a YAML file and return the raw data.

    Args:
        path: Path to the YAML file.

    Returns:
        The parsed YAML data as a dictionary.

    Raises:
        ConfigLoadError: If the file cannot be read or parsed.
    """
    path = Path(path)

    if not path.exists():
        raise ConfigLoadError(f"File not found: {path}", str(path))

    if not path.is_file():
        raise ConfigLoadError(f"Not a file: {path}", str(path))

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigLoadError(f"Invalid YAML: {e}", str(path)) from e
    except OSError as e:
        raise ConfigLoadError(f"Cannot read file: {e}", str(path)) from e

    if data is None:
        return {}

    if not isinstance(data, dict):
        raise ConfigLoadError(
            f"Expected YAML mapping at root, got {type(data).__name__}", str(path)
        )

    return data


def load_config(
    package_root: str | Path, path: str | Path | None = None
) -> CoverageConfig:
    """Load the configuration for a package.

    An explicit ``path`` must exist. Without one, ``testcov.yaml`` in the
    package root is used when present, otherwise the defaults apply.

    Raises:
        ConfigLoadError: If the file cannot be read or parsed.
        ConfigValidationError: If the data fails validation.
    """
    if path is None:
        candidate = Path(package_root) / DEFAULT_CONFIG_FILE
        if not candidate.is_file():
            return CoverageConfig()
        path = candidate

    return parse_config(load_yaml(path))


def parse_config(data: dict) -> CoverageConfig:
    """Validate raw data into a CoverageConfig.

    Raises:
        ConfigValidationError: If the data fails validation.
    """
    try:
        return CoverageConfig.model_validate(data)
    except ValidationError as e:
        errors = [
            {
                "loc": ".".join(str(x) for x in err["loc"]),
                "msg": err["msg"],
                "type": err["type"],
            }
            for err in e.errors()
        ]
        raise ConfigValidationError(
            f"Configuration validation failed with {len(errors)} error(s)", errors
        ) from e
