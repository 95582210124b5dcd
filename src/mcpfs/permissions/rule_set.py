"""First-match-wins evaluator over an ordered list of canonical path rules.

Rules are evaluated in declaration order. For each rule the requested
operation is checked first; a rule that does not grant the operation is
skipped without looking at its path. The first rule that both grants the
operation and covers the query path allows the request. If no rule does,
the request is denied. There are no explicit deny rules.

A :class:`RuleSet` never changes after construction, so concurrent
queries need no locking.

Example
-------
::

    rules = RuleSet([
        CanonicalPathRule(clean_path="/a/b", mask=Permission.READ),
    ])
    assert rules.is_allowed(Permission.READ, "/a/b/c")
    assert not rules.is_allowed(Permission.READ, "/a/bc")
"""
from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterable, Iterator

from mcpfs.permissions.mask import Permission
from mcpfs.permissions.rules import CanonicalPathRule, canonicalize_path

logger = logging.getLogger(__name__)


class RuleSet:
    """Immutable, ordered collection of :class:`CanonicalPathRule`.

    Parameters
    ----------
    rules:
        Canonical rules in evaluation order.
    getcwd:
        Working-directory provider used to absolutize relative query paths.
    """

    __slots__ = ("_rules", "_getcwd")

    def __init__(
        self,
        rules: Iterable[CanonicalPathRule] = (),
        getcwd: Callable[[], str] = os.getcwd,
    ) -> None:
        self._rules: tuple[CanonicalPathRule, ...] = tuple(rules)
        self._getcwd = getcwd

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def match(self, op: Permission, path: str) -> CanonicalPathRule | None:
        """Return the first rule that grants *op* on *path*, or ``None``."""
        target = canonicalize_path(path, self._getcwd)
        for rule in self._rules:
            if not rule.grants(op):
                continue
            if rule.covers(target):
                logger.debug(
                    "Permission ALLOW: op=%s path=%s rule=%s", op, target, rule.clean_path
                )
                return rule
        logger.debug("Permission DENY: op=%s path=%s", op, target)
        return None

    def is_allowed(self, op: Permission, path: str) -> bool:
        """Return True if some rule grants *op* on *path*.

        *path* may be relative or uncleaned; it is canonicalized the same
        way rule paths are.
        """
        return self.match(op, path) is not None

    # ------------------------------------------------------------------
    # Container protocol
    # ------------------------------------------------------------------

    @property
    def rules(self) -> tuple[CanonicalPathRule, ...]:
        """The rules in evaluation order."""
        return self._rules

    def __iter__(self) -> Iterator[CanonicalPathRule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self) -> str:
        return f"RuleSet({list(self._rules)!r})"


def is_allowed(rule_set: RuleSet | None, op: Permission, path: str) -> bool:
    """Evaluate *op* on *path*, denying when no rule set is loaded."""
    if rule_set is None:
        return False
    return rule_set.is_allowed(op, path)
