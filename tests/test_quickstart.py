"""Test that the quickstart API works for mcpfs."""
from __future__ import annotations


def test_quickstart_import() -> None:
    import mcpfs

    assert mcpfs.__version__


def test_quickstart_load_and_query() -> None:
    import mcpfs

    config = mcpfs.ConfigLoader().load_string(
        'paths: [{path: "/srv/data", perms: [read, write]}]'
    )
    assert config.is_allowed(mcpfs.Permission.WRITE, "/srv/data/report.csv") is True
    assert config.is_allowed(mcpfs.Permission.EXEC, "/srv/data/report.csv") is False


def test_quickstart_fail_closed() -> None:
    import mcpfs

    assert mcpfs.is_allowed(None, mcpfs.Permission.READ, "/") is False


def test_quickstart_errors_exported() -> None:
    import mcpfs

    assert issubclass(mcpfs.InvalidPermissionError, mcpfs.ConfigError)
    assert issubclass(mcpfs.ConfigNotFoundError, mcpfs.ConfigIOError)
