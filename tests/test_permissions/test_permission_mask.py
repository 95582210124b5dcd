"""Tests for the Permission mask and parse_permissions."""
from __future__ import annotations

import pytest

from mcpfs.permissions.mask import Permission, UnknownPermissionError, parse_permissions


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


class TestRender:
    def test_none_renders_literal_none(self) -> None:
        assert Permission.NONE.render() == "none"

    def test_single_bit(self) -> None:
        assert str(Permission.WRITE) == "write"

    def test_all_bits_in_fixed_order(self) -> None:
        mask = Permission.EXEC | Permission.READ | Permission.WRITE
        assert str(mask) == "read|write|exec"

    def test_read_exec(self) -> None:
        assert (Permission.EXEC | Permission.READ).render() == "read|exec"

    def test_fstring_uses_render(self) -> None:
        assert f"{Permission.READ | Permission.WRITE}" == "read|write"


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


class TestParsePermissions:
    @pytest.mark.parametrize(
        "name, expected",
        [
            ("read", Permission.READ),
            ("r", Permission.READ),
            ("write", Permission.WRITE),
            ("w", Permission.WRITE),
            ("exec", Permission.EXEC),
            ("execute", Permission.EXEC),
            ("x", Permission.EXEC),
        ],
    )
    def test_aliases(self, name: str, expected: Permission) -> None:
        assert parse_permissions([name]) == expected

    def test_case_insensitive_and_trimmed(self) -> None:
        assert parse_permissions(["  READ ", "Write"]) == Permission.READ | Permission.WRITE

    def test_or_combines(self) -> None:
        mask = parse_permissions(["r", "x", "read"])
        assert mask == Permission.READ | Permission.EXEC

    def test_empty_list_is_none(self) -> None:
        assert parse_permissions([]) == Permission.NONE

    def test_unknown_token_raises(self) -> None:
        with pytest.raises(UnknownPermissionError, match="delete"):
            parse_permissions(["read", "delete"])

    def test_unknown_token_attribute(self) -> None:
        with pytest.raises(UnknownPermissionError) as exc_info:
            parse_permissions([" Admin "])
        assert exc_info.value.token == " Admin "

    def test_unknown_permission_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            parse_permissions(["rw"])


class TestFromName:
    def test_single_name(self) -> None:
        assert Permission.from_name("X") is Permission.EXEC

    def test_unknown(self) -> None:
        with pytest.raises(UnknownPermissionError):
            Permission.from_name("")
