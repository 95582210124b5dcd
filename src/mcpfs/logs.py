"""Process logging setup: JSON-lines records to a file, stderr as fallback.

Every record is written as one JSON object per line carrying a UTC
ISO-8601 timestamp, the level, the logger name, the message, the package
version, and any ``extra`` fields the caller attached.

Example
-------
>>> handle = configure_logging("debug", Path("/tmp/mcpfs/log.json"))
>>> logging.getLogger("mcpfs").info("initialized")
>>> handle.close()
"""
from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path

ROOT_LOGGER_NAME = "mcpfs"

_LEVELS: dict[str, int] = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}

# Attributes every LogRecord carries; anything else came in through ``extra``.
_RESERVED_ATTRS: frozenset[str] = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", None, None)).keys()
) | {"message", "asctime"}


def parse_level(name: str | None) -> int:
    """Map a textual level name to a :mod:`logging` level. Unknown -> INFO."""
    if not name:
        return logging.INFO
    return _LEVELS.get(name.strip().lower(), logging.INFO)


class JsonLinesFormatter(logging.Formatter):
    """Format log records as single-line JSON objects."""

    def __init__(self, version: str) -> None:
        super().__init__()
        self._version = version

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, object] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "version": self._version,
        }
        for key, value in vars(record).items():
            if key not in _RESERVED_ATTRS and not key.startswith("_"):
                payload[key] = value
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


class LoggingHandle:
    """Owns the handler installed by :func:`configure_logging`."""

    def __init__(self, logger: logging.Logger, handler: logging.Handler, destination: str) -> None:
        self._logger = logger
        self._handler = handler
        self.destination = destination

    def close(self) -> None:
        """Detach and close the handler."""
        self._logger.removeHandler(self._handler)
        self._handler.close()


def _open_file_handler(log_path: Path) -> logging.Handler | None:
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        return logging.FileHandler(log_path, mode="a", encoding="utf-8")
    except OSError:
        return None


def configure_logging(level: str | None, log_path: Path | None) -> LoggingHandle:
    """Install a JSON-lines handler on the ``mcpfs`` logger.

    Parameters
    ----------
    level:
        Level name (``debug``/``info``/``warn``/``error``, any case).
    log_path:
        Destination file. ``None``, or a path whose directory cannot be
        created or whose file cannot be opened, logs to stderr instead.

    Returns
    -------
    LoggingHandle
        Call ``close()`` at teardown.
    """
    from mcpfs import __version__

    handler: logging.Handler | None = None
    destination = "<stderr>"
    if log_path is not None:
        handler = _open_file_handler(log_path)
        if handler is not None:
            destination = str(log_path)
    if handler is None:
        handler = logging.StreamHandler(sys.stderr)

    handler.setFormatter(JsonLinesFormatter(__version__))
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(parse_level(level))
    logger.addHandler(handler)
    return LoggingHandle(logger, handler, destination)
