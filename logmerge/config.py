"""Configuration loading from CLI args, env vars, and optional YAML file.

Precedence: CLI args > env vars > YAML file > dataclass defaults.
"""

import logging
import os
from dataclasses import dataclass

import yaml

from logmerge.parser import DEFAULT_ROUTE_PREFIX, IDENTIFIER_LENGTH

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
OUTPUT_FORMATS = ("text", "json")


def _parse_bool(value) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("true", "1", "yes")


@dataclass(frozen=True)
class Config:
    log_dir: str | None = None
    route_prefix: str = DEFAULT_ROUTE_PREFIX
    identifier_length: int = IDENTIFIER_LENGTH
    replace_on_newer: bool = False
    output_format: str = "text"
    log_level: str = "INFO"

    def __post_init__(self):
        if self.output_format not in OUTPUT_FORMATS:
            raise ValueError(
                f"output_format must be one of {OUTPUT_FORMATS}, got {self.output_format!r}"
            )
        if self.log_level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {LOG_LEVELS}, got {self.log_level!r}")
        if self.identifier_length < 1:
            raise ValueError("identifier_length must be positive")


def load_yaml_config(path: str | None) -> dict:
    """Load settings from a YAML file. Returns empty dict if no path.

    Raises ValueError if the file is not valid YAML or not a mapping.
    """
    if not path:
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        logger.warning("Config file %s not found, using defaults", path)
        return {}
    except yaml.YAMLError as e:
        raise ValueError(f"invalid config file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(
            f"invalid config file {path}: expected a mapping, got {type(data).__name__}"
        )
    logger.info("Loaded YAML config from %s", path)
    return data


def _layered(cli_value, env_key: str, yaml_data: dict, yaml_key: str, default):
    """Pick the first value set in CLI, env, then YAML; fall back to default."""
    if cli_value is not None:
        return cli_value
    env_value = os.environ.get(env_key)
    if env_value is not None:
        return env_value
    return yaml_data.get(yaml_key, default)


def load_config(cli_args, yaml_data: dict) -> Config:
    """Build Config from parsed CLI args, env vars, and parsed YAML data."""
    log_dir = _layered(getattr(cli_args, "log_dir", None), "LOG_DIR", yaml_data, "log_dir", Config.log_dir)
    route_prefix = _layered(
        getattr(cli_args, "route_prefix", None),
        "ROUTE_PREFIX", yaml_data, "route_prefix", Config.route_prefix,
    )
    identifier_length = _layered(
        None, "IDENTIFIER_LENGTH", yaml_data, "identifier_length", Config.identifier_length,
    )
    # store_true flags only override when set
    replace_on_newer = _layered(
        True if getattr(cli_args, "replace_on_newer", False) else None,
        "REPLACE_ON_NEWER", yaml_data, "replace_on_newer", Config.replace_on_newer,
    )
    output_format = _layered(
        getattr(cli_args, "output", None),
        "OUTPUT_FORMAT", yaml_data, "output_format", Config.output_format,
    )
    log_level = _layered(
        "DEBUG" if getattr(cli_args, "verbose", False) else None,
        "LOG_LEVEL", yaml_data, "log_level", Config.log_level,
    )

    return Config(
        log_dir=log_dir,
        route_prefix=route_prefix,
        identifier_length=int(identifier_length),
        replace_on_newer=_parse_bool(replace_on_newer),
        output_format=str(output_format).lower(),
        log_level=str(log_level).upper(),
    )
