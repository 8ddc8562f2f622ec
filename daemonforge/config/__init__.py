"""Configuration loading and schema."""

from daemonforge.config.loader import get_config_path, load_config
from daemonforge.config.schema import AutoRunConfig, Config, DriverOverride, DriversConfig

__all__ = [
    "AutoRunConfig",
    "Config",
    "DriverOverride",
    "DriversConfig",
    "get_config_path",
    "load_config",
]
