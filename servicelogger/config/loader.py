"""YAML config file loading."""

from __future__ import annotations

import os
import re
from pathlib import Path

import yaml
from pydantic import ValidationError

from servicelogger.config.schema import FileConfig
from servicelogger.errors import ConfigError
from servicelogger.logging_config import get_logger

logger = get_logger(__name__)

CONFIG_PATH_ENV = "SERVICELOGGER_CONFIG"
DEFAULT_CONFIG_PATH = Path("~/.config/servicelogger/config.yml")


def expand_env_vars(config: object) -> object:
    """Recursively expand environment variables in config.

    Replaces ${VAR} patterns with environment variable values. Unknown
    variables are left untouched.
    """
    if isinstance(config, dict):
        return {k: expand_env_vars(v) for k, v in config.items()}  # type: ignore[misc]
    if isinstance(config, list):
        return [expand_env_vars(item) for item in config]
    if isinstance(config, str):

        def replace_env_var(match: re.Match[str]) -> str:
            env_var = match.group(1)
            return os.getenv(env_var, match.group(0))

        return re.sub(r"\$\{([^}]+)\}", replace_env_var, config)
    return config


def default_config_path() -> Path:
    override = os.getenv(CONFIG_PATH_ENV)
    return Path(override).expanduser() if override else DEFAULT_CONFIG_PATH.expanduser()


def _warn_unknown_keys(model: FileConfig, config_path: Path) -> None:
    if model.model_extra:
        logger.warning("Unknown keys in %s: %s", config_path, list(model.model_extra.keys()))


def load_file_config(path: Path | None = None) -> FileConfig:
    """Load and validate the YAML config file.

    A missing file yields empty defaults. An unreadable or invalid file is a
    configuration error.
    """
    path = path or default_config_path()
    if not path.exists():
        logger.debug("No config file at %s", path)
        return FileConfig()

    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to read config file {path}: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")

    try:
        model = FileConfig.model_validate(expand_env_vars(raw))
    except ValidationError as e:
        raise ConfigError(f"Invalid config file {path}: {e}") from e
    _warn_unknown_keys(model, path)
    return model
