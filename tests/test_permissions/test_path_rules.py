"""Tests for path cleaning and the rule normalizer."""
from __future__ import annotations

import pytest

from mcpfs.errors import ConfigError, InvalidPermissionError
from mcpfs.permissions.mask import Permission
from mcpfs.permissions.rules import (
    CanonicalPathRule,
    DeclaredPathRule,
    canonicalize_path,
    clean_path,
    normalize_rule,
)


def _fixed_cwd() -> str:
    return "/work/dir"


def _broken_cwd() -> str:
    raise FileNotFoundError("cwd was removed")


# ---------------------------------------------------------------------------
# clean_path / canonicalize_path
# ---------------------------------------------------------------------------


class TestCleanPath:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("/a/b/../c", "/a/c"),
            ("/a//b/./c/", "/a/b/c"),
            ("//a/b", "/a/b"),
            ("/..", "/"),
            ("a/./b", "a/b"),
            ("", "."),
        ],
    )
    def test_lexical_cleaning(self, raw: str, expected: str) -> None:
        assert clean_path(raw) == expected

    def test_idempotent_on_canonical_path(self) -> None:
        assert clean_path("/srv/data") == "/srv/data"
        assert canonicalize_path("/srv/data", _fixed_cwd) == "/srv/data"


class TestCanonicalizePath:
    def test_relative_joined_to_cwd(self) -> None:
        assert canonicalize_path("data/../logs", _fixed_cwd) == "/work/dir/logs"

    def test_parent_escape_resolved_lexically(self) -> None:
        assert canonicalize_path("../other", _fixed_cwd) == "/work/other"

    def test_absolute_does_not_call_cwd(self) -> None:
        assert canonicalize_path("/abs/./p", _broken_cwd) == "/abs/p"

    def test_cwd_failure_keeps_relative(self) -> None:
        assert canonicalize_path("rel/./x", _broken_cwd) == "rel/x"


# ---------------------------------------------------------------------------
# normalize_rule
# ---------------------------------------------------------------------------


class TestNormalizeRule:
    def test_empty_perms_defaults_to_read_only(self) -> None:
        rule = normalize_rule(DeclaredPathRule(path="/data"))
        assert rule.mask == Permission.READ
        assert not rule.mask & Permission.WRITE
        assert not rule.mask & Permission.EXEC

    def test_unset_allow_subpaths_defaults_true(self) -> None:
        rule = normalize_rule(DeclaredPathRule(path="/data", perms=["w"]))
        assert rule.allow_subpaths is True

    def test_explicit_allow_subpaths_false_kept(self) -> None:
        rule = normalize_rule(DeclaredPathRule(path="/data", allow_subpaths=False))
        assert rule.allow_subpaths is False

    def test_perms_parsed(self) -> None:
        rule = normalize_rule(DeclaredPathRule(path="/data", perms=["read", "EXEC"]))
        assert rule.mask == Permission.READ | Permission.EXEC

    def test_path_cleaned_and_absolutized(self) -> None:
        rule = normalize_rule(DeclaredPathRule(path="./data/"), getcwd=_fixed_cwd)
        assert rule.clean_path == "/work/dir/data"

    def test_declared_path_and_description_kept(self) -> None:
        decl = DeclaredPathRule(path="/a/./b", description="web root")
        rule = normalize_rule(decl)
        assert rule.declared_path == "/a/./b"
        assert rule.description == "web root"

    def test_unresolvable_cwd_does_not_fail(self) -> None:
        rule = normalize_rule(DeclaredPathRule(path="relative"), getcwd=_broken_cwd)
        assert rule.clean_path == "relative"

    def test_invalid_permission_raises_with_token_and_path(self) -> None:
        decl = DeclaredPathRule(path="/secret", perms=["read", "delete"])
        with pytest.raises(InvalidPermissionError) as exc_info:
            normalize_rule(decl, config_path="cfg.yaml")
        err = exc_info.value
        assert err.token == "delete"
        assert err.rule_path == "/secret"
        assert err.config_path == "cfg.yaml"
        assert "delete" in str(err)
        assert "/secret" in str(err)

    def test_invalid_permission_is_config_error(self) -> None:
        with pytest.raises(ConfigError):
            normalize_rule(DeclaredPathRule(path="/x", perms=["all"]))

    def test_canonical_rule_is_frozen(self) -> None:
        rule = normalize_rule(DeclaredPathRule(path="/data"))
        with pytest.raises(AttributeError):
            rule.clean_path = "/other"  # type: ignore[misc]


class TestDeclaredPathRule:
    def test_unknown_fields_ignored(self) -> None:
        decl = DeclaredPathRule.model_validate(
            {"path": "/a", "users": ["alice"], "roles": ["admin"]}
        )
        assert decl.path == "/a"
        assert not hasattr(decl, "users")

    def test_defaults(self) -> None:
        decl = DeclaredPathRule()
        assert decl.perms == []
        assert decl.allow_subpaths is None
        assert decl.description == ""

    def test_null_fields_become_defaults(self) -> None:
        decl = DeclaredPathRule.model_validate(
            {"path": None, "perms": None, "description": None}
        )
        assert decl.path == ""
        assert decl.perms == []
        assert decl.description == ""

    def test_null_perms_normalize_to_read_only(self) -> None:
        decl = DeclaredPathRule.model_validate({"path": "/data", "perms": None})
        assert normalize_rule(decl, _fixed_cwd).mask == Permission.READ


# ---------------------------------------------------------------------------
# CanonicalPathRule.covers
# ---------------------------------------------------------------------------


class TestCovers:
    def test_exact_match(self) -> None:
        rule = CanonicalPathRule(clean_path="/a/b", mask=Permission.READ, allow_subpaths=False)
        assert rule.covers("/a/b") is True

    def test_subpath(self) -> None:
        rule = CanonicalPathRule(clean_path="/a/b", mask=Permission.READ)
        assert rule.covers("/a/b/c/d") is True

    def test_sibling_with_shared_prefix(self) -> None:
        rule = CanonicalPathRule(clean_path="/a/b", mask=Permission.READ)
        assert rule.covers("/a/bc") is False

    def test_ancestor(self) -> None:
        rule = CanonicalPathRule(clean_path="/a/b", mask=Permission.READ)
        assert rule.covers("/a") is False

    def test_dotdot_prefixed_name_is_a_subpath(self) -> None:
        rule = CanonicalPathRule(clean_path="/a/b", mask=Permission.READ)
        assert rule.covers("/a/b/..hidden") is True

    def test_root_rule_covers_everything(self) -> None:
        rule = CanonicalPathRule(clean_path="/", mask=Permission.READ)
        assert rule.covers("/etc/passwd") is True

    def test_subpaths_disabled(self) -> None:
        rule = CanonicalPathRule(clean_path="/a/b", mask=Permission.READ, allow_subpaths=False)
        assert rule.covers("/a/b/c") is False

    def test_relative_paths_only_match_exactly(self) -> None:
        rule = CanonicalPathRule(clean_path="rel/dir", mask=Permission.READ)
        assert rule.covers("rel/dir") is True
        assert rule.covers("rel/dir/file") is False

    def test_relative_target_under_absolute_rule(self) -> None:
        rule = CanonicalPathRule(clean_path="/", mask=Permission.READ)
        assert rule.covers("relative/path") is False
