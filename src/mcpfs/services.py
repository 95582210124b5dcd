"""External dependencies handed to the loader and application.

:class:`Services` bundles the process environment, a clock and a
working-directory provider so tests can substitute each one. It is passed
explicitly to constructors; nothing resolves a global default lazily.
"""
from __future__ import annotations

import os
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone


def _utc_now() -> datetime:
    return datetime.now(tz=timezone.utc)


@dataclass(frozen=True)
class Services:
    """Environment, clock and working-directory providers.

    Attributes
    ----------
    env:
        Mapping used for ``${VAR}`` expansion and default locations.
    clock:
        Callable returning the current time.
    getcwd:
        Callable returning the current working directory; may raise
        :class:`OSError`.
    """

    env: Mapping[str, str] = field(default_factory=lambda: os.environ)
    clock: Callable[[], datetime] = _utc_now
    getcwd: Callable[[], str] = os.getcwd

    @classmethod
    def default(cls) -> Services:
        """Return services bound to the real process."""
        return cls()
