"""Path permission rules and their evaluator.

Provides the :class:`Permission` mask, the declared/canonical rule types,
the normalizer between them, and the first-match-wins :class:`RuleSet`.

Example
-------
::

    from mcpfs.permissions import DeclaredPathRule, Permission, RuleSet, normalize_rule

    rules = RuleSet([normalize_rule(DeclaredPathRule(path="/srv", perms=["read"]))])
    assert rules.is_allowed(Permission.READ, "/srv/index.html")
"""
from __future__ import annotations

from mcpfs.permissions.mask import Permission, UnknownPermissionError, parse_permissions
from mcpfs.permissions.rule_set import RuleSet, is_allowed
from mcpfs.permissions.rules import (
    CanonicalPathRule,
    DeclaredPathRule,
    canonicalize_path,
    clean_path,
    normalize_rule,
)

__all__ = [
    # Mask
    "Permission",
    "UnknownPermissionError",
    "parse_permissions",
    # Rules
    "CanonicalPathRule",
    "DeclaredPathRule",
    "canonicalize_path",
    "clean_path",
    "normalize_rule",
    # Evaluator
    "RuleSet",
    "is_allowed",
]
