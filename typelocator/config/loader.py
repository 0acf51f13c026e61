# typelocator/config/loader.py
"""
Layered configuration loading.

    1. Package defaults (typelocator/config/defaults.yaml) - always loaded
    2. User config - overrides defaults, found in this order:
       - explicit path argument
       - TYPELOCATOR_CONFIG environment variable
       - ./.typelocator/config.yaml

A broken user file never stops discovery: the problem is logged and the
defaults are used instead.

Usage:
    from typelocator.config import load_config, registry_from_config

    config = load_config()
    registry = registry_from_config(config)
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import ValidationError

from typelocator.config.schema import LocatorConfig
from typelocator.logging.logger import get_logger
from typelocator.logging.tags import CONFIG

logger = get_logger(__name__)

CONFIG_ENV = "TYPELOCATOR_CONFIG"

CONFIG_DIR = ".typelocator"

CONFIG_FILE = "config.yaml"


# =============================================================================
# Errors
# =============================================================================


class ConfigError(Exception):
    """Base error for configuration issues."""

    def __init__(self, message: str, path: Optional[Path] = None):
        self.path = path
        if path:
            message = f"{message} (file: {path})"
        super().__init__(message)


class ConfigNotFoundError(ConfigError):
    """Raised when a config file doesn't exist."""

    pass


class ConfigParseError(ConfigError):
    """Raised when YAML parsing fails."""

    pass


class ConfigValidationError(ConfigError):
    """Raised when config doesn't match the schema."""

    pass


# =============================================================================
# Paths
# =============================================================================


def defaults_path() -> Path:
    return Path(__file__).parent / "defaults.yaml"


def resolve_user_config_path(path: Optional[Union[str, Path]] = None) -> Optional[Path]:
    """
    Locate the user config file.

    An explicit path or the environment variable is returned even if the file
    is missing, so that the caller reports it. The working directory default
    is only returned if it exists.
    """
    if path is not None:
        return Path(path)

    env_path = os.environ.get(CONFIG_ENV)
    if env_path:
        return Path(env_path)

    local = Path.cwd() / CONFIG_DIR / CONFIG_FILE
    if local.is_file():
        return local
    return None


# =============================================================================
# Loading
# =============================================================================


def load_yaml(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Load a YAML file and return it as a dictionary.

    Raises:
        ConfigNotFoundError: If the file doesn't exist
        ConfigParseError: If the YAML is invalid or not a mapping
    """
    p = Path(path)

    if not p.exists():
        raise ConfigNotFoundError("Config file not found", path=p)

    if p.is_dir():
        raise ConfigError("Config path is a directory, not a file", path=p)

    try:
        with p.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigParseError(f"Invalid YAML syntax: {e}", path=p) from e
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigParseError(f"Failed to read config: {e}", path=p) from e

    if not isinstance(data, dict):
        raise ConfigParseError("Config root must be a mapping (dict)", path=p)

    logger.debug(f"{CONFIG} Loaded config from {p}")
    return data


def deep_merge(base: dict, override: dict) -> dict:
    """
    Deep merge two dictionaries.

    Values from `override` take precedence. Nested dicts are merged
    recursively; lists are replaced entirely.

        >>> deep_merge({"a": 1, "b": {"c": 2, "d": 3}}, {"b": {"c": 10}})
        {'a': 1, 'b': {'c': 10, 'd': 3}}
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def validate(data: Dict[str, Any], path: Optional[Path] = None) -> LocatorConfig:
    """
    Raises:
        ConfigValidationError: If the data doesn't match LocatorConfig
    """
    try:
        return LocatorConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigValidationError(f"Invalid configuration: {e}", path=path) from e


def load_config(path: Optional[Union[str, Path]] = None) -> LocatorConfig:
    """
    Package defaults merged with the user config.

    Never raises for a bad user file: the error is logged and the defaults
    are returned.
    """
    defaults = load_yaml(defaults_path())

    user_path = resolve_user_config_path(path)
    if user_path is None:
        logger.debug(f"{CONFIG} No user config, using defaults")
        return validate(defaults)

    try:
        merged = deep_merge(defaults, load_yaml(user_path))
        config = validate(merged, path=user_path)
    except ConfigError as e:
        logger.error(f"{CONFIG} {e} - falling back to defaults")
        return validate(defaults)

    logger.info(
        f"{CONFIG} Loaded {user_path}: {len(config.namespaces)} contract(s), "
        f"{len(config.blacklist)} blacklist entr{'y' if len(config.blacklist) == 1 else 'ies'}"
    )
    return config


def registry_from_config(config: Optional[LocatorConfig] = None, traversal=None):
    """
    Build a resolver and registry from a LocatorConfig.

    The traversal defaults to a SearchPathTraversal over config.search_path
    (sys.path when unset).
    """
    from typelocator.registry import HierarchyRegistry
    from typelocator.resolver.resolver import TypeResolver
    from typelocator.traversal.search_path import SearchPathTraversal

    config = config or load_config()
    if traversal is None:
        traversal = SearchPathTraversal(search_path=config.search_path)

    resolver = TypeResolver(
        traversal=traversal,
        only_default_constructor=config.only_default_constructor,
        only_serializable=config.only_serializable,
    )
    return HierarchyRegistry(
        resolver=resolver,
        namespaces=config.namespaces,
        blacklist=config.blacklist,
    )
