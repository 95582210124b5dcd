"""mcpfs — declarative filesystem access control for MCP servers.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
>>> import mcpfs
>>> config = mcpfs.ConfigLoader().load_string(
...     'paths: [{path: "/srv/data", perms: [read, write]}]'
... )
>>> config.is_allowed(mcpfs.Permission.WRITE, "/srv/data/report.csv")
True
>>> config.is_allowed(mcpfs.Permission.EXEC, "/srv/data/report.csv")
False
"""
from __future__ import annotations

__version__: str = "0.1.0"

from mcpfs.app import App

# ---------------------------------------------------------------------------
# Permissions
# ---------------------------------------------------------------------------
from mcpfs.permissions.mask import Permission, UnknownPermissionError, parse_permissions
from mcpfs.permissions.rule_set import RuleSet, is_allowed
from mcpfs.permissions.rules import CanonicalPathRule, DeclaredPathRule, normalize_rule

# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------
from mcpfs.config.env_expansion import expand_env
from mcpfs.config.loader import ConfigLoader, read_and_parse_config
from mcpfs.config.schema import Config, ConfigDocument
from mcpfs.services import Services

# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------
from mcpfs.errors import (
    ConfigError,
    ConfigIOError,
    ConfigIsDirectoryError,
    ConfigNotFoundError,
    ConfigParseError,
    InvalidPermissionError,
)

__all__ = [
    "__version__",
    "App",
    # Permissions
    "CanonicalPathRule",
    "DeclaredPathRule",
    "Permission",
    "RuleSet",
    "UnknownPermissionError",
    "is_allowed",
    "normalize_rule",
    "parse_permissions",
    # Configuration
    "Config",
    "ConfigDocument",
    "ConfigLoader",
    "Services",
    "expand_env",
    "read_and_parse_config",
    # Errors
    "ConfigError",
    "ConfigIOError",
    "ConfigIsDirectoryError",
    "ConfigNotFoundError",
    "ConfigParseError",
    "InvalidPermissionError",
]
