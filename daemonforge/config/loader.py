"""Load configuration from ~/.daemonforge/config.json."""

import json
import re
from pathlib import Path
from typing import Any

from loguru import logger

from daemonforge.config.schema import Config


def get_config_path() -> Path:
    """Get the default configuration file path."""
    return Path.home() / ".daemonforge" / "config.json"


def camel_to_snake(name: str) -> str:
    """Convert camelCase to snake_case."""
    return re.sub(r"(?<!^)(?=[A-Z])", "_", name).lower()


def convert_keys(data: Any) -> Any:
    """Recursively convert dict keys from camelCase to snake_case.

    Keys of the driver ``overrides`` mapping are driver shorthands and are left alone.
    """
    if isinstance(data, dict):
        result = {}
        for key, value in data.items():
            new_key = camel_to_snake(key)
            if new_key == "overrides" and isinstance(value, dict):
                result[new_key] = {k: convert_keys(v) for k, v in value.items()}
            else:
                result[new_key] = convert_keys(value)
        return result
    if isinstance(data, list):
        return [convert_keys(item) for item in data]
    return data


def load_config(config_path: Path | None = None) -> Config:
    """Load config from file or return defaults.

    Environment variables (DAEMONFORGE_*) only apply when no file is loaded.
    """
    path = config_path or get_config_path()

    if path.is_file():
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
            return Config.model_validate(convert_keys(data))
        except (OSError, json.JSONDecodeError, ValueError) as e:
            logger.warning(f"Failed to load config from {path}: {e}. Using defaults.")
    elif path.exists():
        logger.warning(f"Config path {path} is not a file. Using defaults.")

    return Config()
