"""Declared and canonical path rules, and the normalizer between them.

A :class:`DeclaredPathRule` is the untrusted, user-authored form read from
the YAML document. :func:`normalize_rule` turns it into an immutable
:class:`CanonicalPathRule` exactly once, at load time:

- an empty ``perms`` list becomes read-only,
- the path is lexically cleaned and made absolute against the working
  directory when possible (a failing working-directory lookup keeps the
  relative form instead of failing the load),
- an unset ``allow_subpaths`` becomes ``True``.

Example
-------
::

    decl = DeclaredPathRule(path="/srv/www/./static/..", perms=["r", "x"])
    rule = normalize_rule(decl)
    assert rule.clean_path == "/srv/www"
    assert rule.allow_subpaths is True
"""
from __future__ import annotations

import logging
import os
from collections.abc import Callable
from dataclasses import dataclass

from pydantic import BaseModel, Field, field_validator

from mcpfs.errors import InvalidPermissionError
from mcpfs.permissions.mask import Permission, UnknownPermissionError, parse_permissions

logger = logging.getLogger(__name__)

DEFAULT_ALLOW_SUBPATHS: bool = True
DEFAULT_PERMISSION: Permission = Permission.READ


# ---------------------------------------------------------------------------
# Path helpers
# ---------------------------------------------------------------------------


def clean_path(path: str) -> str:
    """Lexically clean *path* without touching the filesystem.

    Redundant separators and ``.`` segments are removed and ``..`` segments
    are folded into their parent. An empty path becomes ``"."``.
    """
    cleaned = os.path.normpath(path) if path else os.curdir
    # POSIX normpath keeps a leading "//" as implementation-defined; fold it.
    if os.sep == "/" and cleaned.startswith("//"):
        cleaned = "/" + cleaned.lstrip("/")
    return cleaned


def canonicalize_path(path: str, getcwd: Callable[[], str] = os.getcwd) -> str:
    """Clean *path* and, when relative, resolve it against ``getcwd()``.

    If the working directory cannot be determined the cleaned relative
    path is returned unchanged.
    """
    cleaned = clean_path(path)
    if os.path.isabs(cleaned):
        return cleaned
    try:
        cwd = getcwd()
    except OSError as exc:
        logger.debug("Keeping relative path %r: cannot resolve cwd (%s)", cleaned, exc)
        return cleaned
    return clean_path(os.path.join(cwd, cleaned))


# ---------------------------------------------------------------------------
# Rule types
# ---------------------------------------------------------------------------


class DeclaredPathRule(BaseModel):
    """One entry of the ``paths`` list, as written by the operator.

    YAML schema::

        - path: "/var/www"          # may contain ${VARS}
          perms: ["read", "exec"]   # default: read-only
          allow_subpaths: true      # default: true
          description: "web content dir"
    """

    model_config = {"extra": "ignore"}

    path: str = Field(default="")
    perms: list[str] = Field(default_factory=list)
    allow_subpaths: bool | None = Field(default=None)
    description: str = Field(default="")

    @field_validator("perms", mode="before")
    @classmethod
    def null_perms_as_empty(cls, value: object) -> object:
        return [] if value is None else value

    @field_validator("path", "description", mode="before")
    @classmethod
    def null_string_as_empty(cls, value: object) -> object:
        return "" if value is None else value


@dataclass(frozen=True)
class CanonicalPathRule:
    """Evaluatable form of a path rule.

    Attributes
    ----------
    clean_path:
        Absolute (best effort), lexically cleaned path the rule covers.
    mask:
        Operations granted by this rule.
    allow_subpaths:
        Whether paths below ``clean_path`` are covered too.
    declared_path:
        The rule's path as written in the document, kept for diagnostics.
    description:
        Free text carried over from the declaration.
    """

    clean_path: str
    mask: Permission
    allow_subpaths: bool = DEFAULT_ALLOW_SUBPATHS
    declared_path: str = ""
    description: str = ""

    def grants(self, op: Permission) -> bool:
        """Return True if this rule grants any bit of *op*."""
        return bool(self.mask & op)

    def covers(self, target: str) -> bool:
        """Return True if the canonical *target* path falls under this rule."""
        if target == self.clean_path:
            return True
        if not self.allow_subpaths:
            return False
        # Relative forms only remain when the cwd was unresolvable.
        if not (os.path.isabs(target) and os.path.isabs(self.clean_path)):
            return False
        try:
            rel = os.path.relpath(target, self.clean_path)
        except ValueError:
            # Different drives.
            return False
        if rel == os.curdir:
            return True
        return not (rel == os.pardir or rel.startswith(os.pardir + os.sep))


# ---------------------------------------------------------------------------
# Normalizer
# ---------------------------------------------------------------------------


def normalize_rule(
    decl: DeclaredPathRule,
    getcwd: Callable[[], str] = os.getcwd,
    config_path: str | None = None,
) -> CanonicalPathRule:
    """Convert a declared rule into its canonical form.

    Parameters
    ----------
    decl:
        The rule as declared (environment variables already expanded).
    getcwd:
        Working-directory provider used to absolutize relative paths.
    config_path:
        Source identifier used in error messages.

    Returns
    -------
    CanonicalPathRule

    Raises
    ------
    InvalidPermissionError
        If ``decl.perms`` contains an unknown permission name.
    """
    if decl.perms:
        try:
            mask = parse_permissions(decl.perms)
        except UnknownPermissionError as exc:
            raise InvalidPermissionError(exc.token, decl.path, config_path) from exc
    else:
        mask = DEFAULT_PERMISSION

    allow_subpaths = (
        DEFAULT_ALLOW_SUBPATHS if decl.allow_subpaths is None else decl.allow_subpaths
    )

    return CanonicalPathRule(
        clean_path=canonicalize_path(decl.path, getcwd),
        mask=mask,
        allow_subpaths=allow_subpaths,
        declared_path=decl.path,
        description=decl.description,
    )
