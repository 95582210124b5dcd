"""Exception hierarchy for configuration loading.

All loading failures derive from :class:`ConfigError` so callers can catch a
single type and decide on recovery (for example, falling back to an empty
configuration). Query-time evaluation never raises.

::

    ConfigError
    ├── ConfigIOError
    │   ├── ConfigNotFoundError
    │   └── ConfigIsDirectoryError
    ├── ConfigParseError
    └── InvalidPermissionError
"""
from __future__ import annotations


class ConfigError(Exception):
    """Base class for configuration errors.

    Attributes
    ----------
    config_path:
        The source of the configuration that failed, if known.
    """

    def __init__(self, message: str, config_path: str | None = None) -> None:
        self.config_path = config_path
        prefix = f"[{config_path}] " if config_path else ""
        super().__init__(f"{prefix}{message}")


class ConfigIOError(ConfigError):
    """Raised when the configuration file cannot be read.

    The originating :class:`OSError` is available as ``__cause__``.
    """


class ConfigNotFoundError(ConfigIOError):
    """Raised when the configuration path does not exist."""


class ConfigIsDirectoryError(ConfigIOError):
    """Raised when the configuration path names a directory."""


class ConfigParseError(ConfigError):
    """Raised when the document is not valid YAML or does not fit the schema."""


class InvalidPermissionError(ConfigError):
    """Raised when a path rule names a permission that does not exist.

    Attributes
    ----------
    token:
        The unrecognised permission name.
    rule_path:
        The rule's path as written in the document (after env expansion).
    """

    def __init__(
        self,
        token: str,
        rule_path: str,
        config_path: str | None = None,
    ) -> None:
        self.token = token
        self.rule_path = rule_path
        super().__init__(
            f"invalid perms for path {rule_path!r}: unknown permission {token!r}",
            config_path,
        )
