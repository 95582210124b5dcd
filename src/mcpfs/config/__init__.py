"""Configuration loading for mcpfs.

Reads a YAML document, expands environment variables, and normalizes its
path rules into a queryable :class:`~mcpfs.permissions.RuleSet`.
"""
from __future__ import annotations

from mcpfs.config.env_expansion import expand_env, expand_string
from mcpfs.config.loader import ConfigLoader, read_and_parse_config, read_config_data
from mcpfs.config.paths import (
    APP_NAME,
    DEFAULT_CONFIG_FILENAME,
    default_config_path,
    default_log_path,
    user_config_dir,
    user_state_dir,
)
from mcpfs.config.schema import CONFIG_VERSION_V1, Config, ConfigDocument

__all__ = [
    "APP_NAME",
    "CONFIG_VERSION_V1",
    "Config",
    "ConfigDocument",
    "ConfigLoader",
    "DEFAULT_CONFIG_FILENAME",
    "default_config_path",
    "default_log_path",
    "expand_env",
    "expand_string",
    "read_and_parse_config",
    "read_config_data",
    "user_config_dir",
    "user_state_dir",
]
