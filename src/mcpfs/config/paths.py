"""Per-user configuration and state locations.

Locations follow the XDG base-directory convention and are computed from
an injected environment mapping rather than ``os.environ`` directly.
"""
from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

from mcpfs.errors import ConfigError

APP_NAME = "mcpfs"
DEFAULT_CONFIG_FILENAME = "config.yaml"
DEFAULT_LOG_FILENAME = "log.json"


def _base_dir(env: Mapping[str, str], xdg_var: str, home_suffix: tuple[str, ...]) -> Path:
    xdg = env.get(xdg_var, "")
    if xdg:
        return Path(xdg)
    home = env.get("HOME", "") or env.get("USERPROFILE", "")
    if not home:
        raise ConfigError(f"cannot determine user directory: neither {xdg_var} nor HOME is set")
    return Path(home).joinpath(*home_suffix)


def user_config_dir(env: Mapping[str, str]) -> Path:
    """Return ``$XDG_CONFIG_HOME/mcpfs`` or ``$HOME/.config/mcpfs``."""
    return _base_dir(env, "XDG_CONFIG_HOME", (".config",)) / APP_NAME


def user_state_dir(env: Mapping[str, str]) -> Path:
    """Return ``$XDG_STATE_HOME/mcpfs`` or ``$HOME/.local/state/mcpfs``."""
    return _base_dir(env, "XDG_STATE_HOME", (".local", "state")) / APP_NAME


def default_config_path(env: Mapping[str, str]) -> Path:
    """Return the default configuration file path."""
    return user_config_dir(env) / DEFAULT_CONFIG_FILENAME


def default_log_path(env: Mapping[str, str]) -> Path:
    """Return the default JSON log file path."""
    return user_state_dir(env) / DEFAULT_LOG_FILENAME
