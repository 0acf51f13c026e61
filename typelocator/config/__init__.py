from typelocator.config.loader import (
    ConfigError,
    ConfigNotFoundError,
    ConfigParseError,
    ConfigValidationError,
    deep_merge,
    load_config,
    load_yaml,
    registry_from_config,
    resolve_user_config_path,
)
from typelocator.config.schema import LocatorConfig

__all__ = [
    "ConfigError",
    "ConfigNotFoundError",
    "ConfigParseError",
    "ConfigValidationError",
    "LocatorConfig",
    "deep_merge",
    "load_config",
    "load_yaml",
    "registry_from_config",
    "resolve_user_config_path",
]
