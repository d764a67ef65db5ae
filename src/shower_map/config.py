"""Configuration system for shower-map.

Provides hierarchical configuration with precedence:
1. CLI flags (highest)
2. Environment variables
3. Project config (./.shower_map.json)
4. Global config (~/.shower_map_config.json)
5. Hardcoded defaults (lowest)
"""

from __future__ import annotations

import copy
import json
import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

# Valid values for enums
VALID_OUTPUT_FORMATS = ("ascii", "json", "text")
VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# Hardcoded defaults
DEFAULT_OUTPUT_FORMAT = "ascii"
DEFAULT_PRECISION = 4
DEFAULT_WIDTH = 120
DEFAULT_LOG_LEVEL = "WARNING"

# Environment variable names
ENV_OUTPUT_FORMAT = "SHOWER_MAP_OUTPUT_FORMAT"
ENV_PRECISION = "SHOWER_MAP_PRECISION"
ENV_WIDTH = "SHOWER_MAP_WIDTH"
ENV_LOG_LEVEL = "SHOWER_MAP_LOG_LEVEL"

GLOBAL_CONFIG_NAME = ".shower_map_config.json"
PROJECT_CONFIG_NAME = ".shower_map.json"


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""

    pass


class ConfigLoadError(Exception):
    """Raised when configuration file cannot be loaded."""

    pass


def _check_unknown(cls: type, data: dict[str, Any], section: str) -> None:
    known_fields = {f.name for f in fields(cls)}
    unknown = set(data.keys()) - known_fields
    if unknown:
        raise ConfigValidationError(
            f"Unknown fields in {section} config: {', '.join(sorted(unknown))}"
        )


@dataclass
class RenderConfig:
    """How forests and quantities are displayed."""

    output_format: str = DEFAULT_OUTPUT_FORMAT
    precision: int = DEFAULT_PRECISION
    width: int = DEFAULT_WIDTH

    def validate(self) -> None:
        if not isinstance(self.output_format, str):
            raise ConfigValidationError(
                f"output_format must be a string, got {self.output_format!r}"
            )
        for name in ("precision", "width"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigValidationError(f"{name} must be an integer, got {value!r}")
        if self.output_format not in VALID_OUTPUT_FORMATS:
            raise ConfigValidationError(
                f"Invalid output_format '{self.output_format}'. "
                f"Valid values: {', '.join(VALID_OUTPUT_FORMATS)}"
            )
        if self.precision < 0:
            raise ConfigValidationError(
                f"precision must be non-negative, got {self.precision}"
            )
        if self.width <= 0:
            raise ConfigValidationError(f"width must be positive, got {self.width}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "output_format": self.output_format,
            "precision": self.precision,
            "width": self.width,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any], strict: bool = False) -> "RenderConfig":
        if strict:
            _check_unknown(cls, data, "render")
        return cls(
            output_format=data.get("output_format", DEFAULT_OUTPUT_FORMAT),
            precision=data.get("precision", DEFAULT_PRECISION),
            width=data.get("width", DEFAULT_WIDTH),
        )


@dataclass
class ShowerMapConfig:
    """Root configuration object."""

    version: str = "1"
    render: RenderConfig = field(default_factory=RenderConfig)
    log_level: str = DEFAULT_LOG_LEVEL

    def validate(self) -> None:
        """Validate all sections."""
        self.render.validate()
        if not isinstance(self.log_level, str):
            raise ConfigValidationError(f"log_level must be a string, got {self.log_level!r}")
        if self.log_level.upper() not in VALID_LOG_LEVELS:
            raise ConfigValidationError(
                f"Invalid log_level '{self.log_level}'. "
                f"Valid values: {', '.join(VALID_LOG_LEVELS)}"
            )

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": self.version,
            "render": self.render.to_dict(),
            "log_level": self.log_level,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any], strict: bool = False) -> "ShowerMapConfig":
        """Create from dictionary. Keys starting with '_' are comments."""
        data = {k: v for k, v in data.items() if not k.startswith("_")}
        if strict:
            _check_unknown(cls, data, "top-level")
        render = data.get("render", {})
        if not isinstance(render, dict):
            raise ConfigValidationError(
                f"render section must be an object, got {type(render).__name__}"
            )
        render = {k: v for k, v in render.items() if not k.startswith("_")}
        return cls(
            version=str(data.get("version", "1")),
            render=RenderConfig.from_dict(render, strict=strict),
            log_level=data.get("log_level", DEFAULT_LOG_LEVEL),
        )


def get_global_config_path() -> Path:
    """Get path to global config file."""
    return Path.home() / GLOBAL_CONFIG_NAME


def get_project_config_path(project_dir: Path | None = None) -> Path:
    """Get path to project config file."""
    return (project_dir or Path.cwd()) / PROJECT_CONFIG_NAME


def load_config_file(path: Path, strict: bool = False) -> ShowerMapConfig:
    """Load configuration from a JSON file.

    Args:
        path: Path to the config file
        strict: If True, fail on unknown fields

    Returns:
        ShowerMapConfig instance (defaults if the file does not exist)

    Raises:
        ConfigLoadError: If file cannot be read or parsed
        ConfigValidationError: If strict=True and unknown fields found
    """
    if not path.exists():
        return ShowerMapConfig()

    try:
        content = path.read_text()
    except OSError as e:
        raise ConfigLoadError(f"Error reading {path}: {e}")

    if not content.strip():
        logger.warning("Config file %s is empty, using defaults", path)
        return ShowerMapConfig()

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ConfigLoadError(f"Invalid JSON in {path}: {e}")

    if not isinstance(data, dict):
        raise ConfigLoadError(f"Config in {path} must be a JSON object")

    logger.debug("Loaded config from %s", path)
    return ShowerMapConfig.from_dict(data, strict=strict)


def merge_configs(*configs: ShowerMapConfig) -> ShowerMapConfig:
    """Merge multiple configs with later configs taking precedence.

    Only values that differ from the hardcoded defaults override earlier
    configs, so partial files layer properly.
    """
    if not configs:
        return ShowerMapConfig()

    result = copy.deepcopy(configs[0])

    for config in configs[1:]:
        if config.render.output_format != DEFAULT_OUTPUT_FORMAT:
            result.render.output_format = config.render.output_format
        if config.render.precision != DEFAULT_PRECISION:
            result.render.precision = config.render.precision
        if config.render.width != DEFAULT_WIDTH:
            result.render.width = config.render.width
        if config.log_level != DEFAULT_LOG_LEVEL:
            result.log_level = config.log_level

    return result


def _int_env(name: str) -> int | None:
    raw = os.environ.get(name)
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        raise ConfigValidationError(f"{name} must be an integer, got '{raw}'")


def apply_env_overrides(config: ShowerMapConfig) -> ShowerMapConfig:
    """Return a copy of config with environment variables applied."""
    result = copy.deepcopy(config)

    if output_format := os.environ.get(ENV_OUTPUT_FORMAT):
        result.render.output_format = output_format.lower()

    if (precision := _int_env(ENV_PRECISION)) is not None:
        result.render.precision = precision

    if (width := _int_env(ENV_WIDTH)) is not None:
        result.render.width = width

    if log_level := os.environ.get(ENV_LOG_LEVEL):
        result.log_level = log_level.upper()

    return result


def get_config(
    project_dir: Path | None = None,
    config_path: Path | None = None,
) -> ShowerMapConfig:
    """Load and merge configuration from all sources.

    Loads in order (later sources override earlier):
    1. Hardcoded defaults
    2. Global config
    3. Project config, or config_path when given
    4. Environment variables

    The result is validated before being returned.
    """
    base_config = ShowerMapConfig()
    global_config = load_config_file(get_global_config_path())

    if config_path is not None:
        if not config_path.exists():
            raise ConfigLoadError(f"Config file not found: {config_path}")
        project_config = load_config_file(config_path)
    else:
        project_config = load_config_file(get_project_config_path(project_dir))

    merged = merge_configs(base_config, global_config, project_config)
    result = apply_env_overrides(merged)
    result.validate()
    return result


def generate_config_template() -> dict[str, Any]:
    """Generate a config template dictionary with comment fields."""
    return {
        "version": "1",
        "_comment_version": "Config file format version",
        "render": {
            "output_format": DEFAULT_OUTPUT_FORMAT,
            "_comment_output_format": f"Output format. Valid: {', '.join(VALID_OUTPUT_FORMATS)}",
            "precision": DEFAULT_PRECISION,
            "_comment_precision": "Digits after the decimal point for quantities",
            "width": DEFAULT_WIDTH,
            "_comment_width": "Console width for ascii output",
        },
        "log_level": DEFAULT_LOG_LEVEL,
        "_comment_log_level": f"Log level. Valid: {', '.join(VALID_LOG_LEVELS)}",
    }


def generate_config_template_string() -> str:
    """Generate a config template as a formatted JSON string."""
    return json.dumps(generate_config_template(), indent=2)
