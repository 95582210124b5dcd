"""Permission bitmask for filesystem operations.

A :class:`Permission` is a small bit-set over ``read``, ``write`` and
``exec``. Values combine with ``|`` and render as their member names joined
by ``|`` in that fixed order, or ``"none"`` when empty.

Example
-------
::

    mask = parse_permissions(["read", "x"])
    assert mask == Permission.READ | Permission.EXEC
    assert str(mask) == "read|exec"
"""
from __future__ import annotations

from collections.abc import Iterable
from enum import IntFlag


class UnknownPermissionError(ValueError):
    """Raised when a permission name cannot be mapped to a bit.

    Attributes
    ----------
    token:
        The offending permission name exactly as supplied.
    """

    def __init__(self, token: str) -> None:
        self.token = token
        super().__init__(f"unknown permission {token!r}")


class Permission(IntFlag):
    """Bitmask of path operations."""

    NONE = 0
    READ = 1
    WRITE = 2
    EXEC = 4

    @classmethod
    def from_name(cls, name: str) -> Permission:
        """Return the single bit named by *name* (case-insensitive, trimmed).

        Raises
        ------
        UnknownPermissionError
            If *name* is not one of the recognised aliases.
        """
        bit = _ALIASES.get(name.strip().lower())
        if bit is None:
            raise UnknownPermissionError(name)
        return bit

    def render(self) -> str:
        """Return ``"none"`` or the set member names joined by ``|``."""
        parts = [label for bit, label in _RENDER_ORDER if self & bit]
        return "|".join(parts) if parts else "none"

    def __str__(self) -> str:
        return self.render()

    def __format__(self, format_spec: str) -> str:
        return format(self.render(), format_spec)


_ALIASES: dict[str, Permission] = {
    "read": Permission.READ,
    "r": Permission.READ,
    "write": Permission.WRITE,
    "w": Permission.WRITE,
    "exec": Permission.EXEC,
    "execute": Permission.EXEC,
    "x": Permission.EXEC,
}

_RENDER_ORDER: tuple[tuple[Permission, str], ...] = (
    (Permission.READ, "read"),
    (Permission.WRITE, "write"),
    (Permission.EXEC, "exec"),
)


def parse_permissions(names: Iterable[str]) -> Permission:
    """OR-combine permission names into a single :class:`Permission` mask.

    Parameters
    ----------
    names:
        Permission names such as ``"read"``, ``"W"`` or ``" execute "``.
        An empty iterable yields ``Permission.NONE``.

    Returns
    -------
    Permission

    Raises
    ------
    UnknownPermissionError
        On the first name that is not recognised.
    """
    mask = Permission.NONE
    for name in names:
        mask |= Permission.from_name(name)
    return mask
