"""Application object shared by the command-line front end.

:class:`App` owns the currently loaded :class:`~mcpfs.config.Config`.
Queries read the current reference; :meth:`App.reload` builds a complete new
configuration first and only then swaps it in, so a query never observes a
half-built rule set. A failed reload keeps the previous configuration.
"""
from __future__ import annotations

import logging
import threading
from pathlib import Path

from mcpfs.config.loader import ConfigLoader
from mcpfs.config.schema import Config
from mcpfs.permissions.mask import Permission
from mcpfs.permissions.rule_set import is_allowed
from mcpfs.permissions.rules import CanonicalPathRule
from mcpfs.services import Services

logger = logging.getLogger(__name__)


class App:
    """Holds the loaded configuration and answers permission queries.

    Parameters
    ----------
    config:
        The loaded configuration, or ``None`` (every query is denied).
    services:
        Providers passed on to the loader on :meth:`reload`.
    """

    def __init__(self, config: Config | None, services: Services | None = None) -> None:
        self._config = config
        self._services = services if services is not None else Services.default()
        self._lock = threading.Lock()

    @property
    def config(self) -> Config | None:
        return self._config

    @property
    def services(self) -> Services:
        return self._services

    def is_allowed(self, op: Permission, path: str) -> bool:
        """Return True if the current configuration grants *op* on *path*."""
        config = self._config
        return is_allowed(config.rules if config is not None else None, op, path)

    def match(self, op: Permission, path: str) -> CanonicalPathRule | None:
        """Return the rule that grants *op* on *path*, if any."""
        config = self._config
        if config is None:
            return None
        return config.rules.match(op, path)

    def reload(self, config_path: str | Path | None = None) -> Config:
        """Load a fresh configuration and make it current.

        Parameters
        ----------
        config_path:
            File to load. Defaults to the current configuration's source,
            then to the per-user default location.

        Raises
        ------
        mcpfs.errors.ConfigError
            If loading fails; the previous configuration stays current.
        """
        loader = ConfigLoader(self._services)
        if config_path is None and self._config is not None and self._config.source:
            config_path = self._config.source
        new_config = loader.load(config_path) if config_path is not None else loader.load_default()
        with self._lock:
            self._config = new_config
        logger.info("Configuration reloaded from %s", new_config.source)
        return new_config

    def run(self) -> None:
        """Log the application start with a summary of the configuration."""
        config = self._config
        logger.info(
            "application running",
            extra={
                "config_source": config.source if config is not None else None,
                "rule_count": len(config.rules) if config is not None else 0,
                "started_at": self._services.clock().isoformat(),
            },
        )
