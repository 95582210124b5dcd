"""YAML configuration loader producing a queryable :class:`Config`.

Loading runs in a fixed order:

1. read the file bytes (missing file, directory, or unreadable file fail
   with a :class:`~mcpfs.errors.ConfigIOError` subclass),
2. parse YAML into plain data (syntax errors fail with
   :class:`~mcpfs.errors.ConfigParseError`),
3. stamp the default version when absent,
4. expand ``${VAR}`` references in every string, once,
5. validate against :class:`ConfigDocument`,
6. normalize every declared path rule, in order, into a :class:`RuleSet`.

Any failure rejects the whole document; no partial rule set is returned.

Example
-------
::

    loader = ConfigLoader()
    config = loader.load("/etc/mcpfs/config.yaml")
    config.is_allowed(Permission.WRITE, "/var/data/foo")
"""
from __future__ import annotations

import logging
import stat
from pathlib import Path

import yaml
from pydantic import ValidationError

from mcpfs.config.env_expansion import expand_env
from mcpfs.config.paths import default_config_path
from mcpfs.config.schema import CONFIG_VERSION_V1, Config, ConfigDocument
from mcpfs.errors import (
    ConfigIOError,
    ConfigIsDirectoryError,
    ConfigNotFoundError,
    ConfigParseError,
)
from mcpfs.permissions.rule_set import RuleSet
from mcpfs.permissions.rules import normalize_rule
from mcpfs.services import Services

logger = logging.getLogger(__name__)


def read_config_data(config_path: str | Path) -> bytes:
    """Return the raw bytes of the file at *config_path*.

    Raises
    ------
    ConfigNotFoundError
        If the path does not exist.
    ConfigIsDirectoryError
        If the path is a directory.
    ConfigIOError
        If the file cannot be stat'ed or read.
    """
    path = Path(config_path)
    source = str(path)
    try:
        info = path.stat()
    except FileNotFoundError as exc:
        raise ConfigNotFoundError(f"stat config file: {exc}", source) from exc
    except OSError as exc:
        raise ConfigIOError(f"stat config file: {exc}", source) from exc
    if stat.S_ISDIR(info.st_mode):
        raise ConfigIsDirectoryError(f"config path {source!r} is a directory", source)
    try:
        return path.read_bytes()
    except OSError as exc:
        raise ConfigIOError(f"read config file: {exc}", source) from exc


class ConfigLoader:
    """Loads :class:`Config` objects from YAML files, strings or bytes.

    Parameters
    ----------
    services:
        Environment and working-directory providers. The environment feeds
        ``${VAR}`` expansion and the default location; the working
        directory absolutizes relative rule and query paths.
    """

    def __init__(self, services: Services | None = None) -> None:
        self._services = services if services is not None else Services.default()

    @property
    def services(self) -> Services:
        return self._services

    def default_config_path(self) -> Path:
        """Return the per-user default configuration path."""
        return default_config_path(self._services.env)

    def load(self, config_path: str | Path) -> Config:
        """Load and normalize the configuration file at *config_path*."""
        data = read_config_data(config_path)
        return self.load_bytes(data, source=str(config_path))

    def load_default(self) -> Config:
        """Load the configuration from :meth:`default_config_path`."""
        return self.load(self.default_config_path())

    def load_string(self, yaml_content: str, source: str | None = None) -> Config:
        """Load a configuration from YAML text."""
        return self._build(self._parse(yaml_content, source), source)

    def load_bytes(self, data: bytes, source: str | None = None) -> Config:
        """Load a configuration from raw YAML bytes."""
        return self._build(self._parse(data, source), source)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _parse(self, content: str | bytes, source: str | None) -> object:
        try:
            return yaml.safe_load(content)
        except yaml.YAMLError as exc:
            raise ConfigParseError(f"yaml parse: {exc}", source) from exc

    def _build(self, raw: object, source: str | None) -> Config:
        if raw is None:
            raw = {}
        if not isinstance(raw, dict):
            raise ConfigParseError(
                f"config must be a YAML mapping, got {type(raw).__name__}", source
            )

        if not raw.get("version"):
            raw["version"] = CONFIG_VERSION_V1

        expand_env(raw, self._services.env)

        try:
            document = ConfigDocument.model_validate(raw)
        except ValidationError as exc:
            raise ConfigParseError(f"schema: {exc}", source) from exc

        rules = RuleSet(
            (
                normalize_rule(decl, self._services.getcwd, source)
                for decl in document.paths
            ),
            getcwd=self._services.getcwd,
        )
        logger.info(
            "Loaded %d path rules from %s (version=%s)",
            len(rules),
            source or "<string>",
            document.version,
        )
        return Config(document=document, rules=rules, source=source)


def read_and_parse_config(config_path: str | Path) -> Config:
    """Load *config_path* with the real process environment."""
    return ConfigLoader().load(config_path)
