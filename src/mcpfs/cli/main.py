"""CLI entry point for mcpfs.

Invoked as::

    mcpfs [OPTIONS] COMMAND [ARGS]...

or during development::

    python -m mcpfs.cli.main

Global options
--------------
- ``--config/-c``  YAML configuration file (default: per-user location)
- ``--log-level``  debug/info/warn/error (default: config ``log_level``, then info)
- ``--logfile``    JSON log destination (default: config ``log_path``, then
  the per-user state directory)

Commands
--------
- check    Decide whether an operation on a path is allowed
- rules    List the loaded path rules in evaluation order
- show     Print the expanded configuration document as YAML or JSON
- version  Show version information
"""
from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from pathlib import Path

import click
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from mcpfs.app import App
from mcpfs.config.loader import ConfigLoader
from mcpfs.config.paths import default_log_path
from mcpfs.config.schema import Config
from mcpfs.errors import ConfigError
from mcpfs.logs import configure_logging
from mcpfs.permissions.mask import Permission
from mcpfs.services import Services

console = Console()
err_console = Console(stderr=True)

logger = logging.getLogger(__name__)

_OPERATIONS = ["read", "write", "exec", "execute", "r", "w", "x"]


@dataclass
class _State:
    app: App


# ---------------------------------------------------------------------------
# Setup helpers
# ---------------------------------------------------------------------------


def _load_config(loader: ConfigLoader, config_path: str | None) -> Config:
    """Load the explicit file, else the default file when present, else nothing."""
    if config_path is not None:
        return loader.load(config_path)
    try:
        default_path = loader.default_config_path()
    except ConfigError:
        return Config()
    if default_path.is_file():
        return loader.load(default_path)
    return Config()


def _resolve_log_path(flag: str | None, config: Config, services: Services) -> Path | None:
    if flag:
        return Path(flag)
    if config.log_path:
        return Path(config.log_path)
    try:
        return default_log_path(services.env)
    except ConfigError:
        return None


# ---------------------------------------------------------------------------
# Root command group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="mcpfs")
@click.option(
    "--config",
    "-c",
    "config_path",
    default=None,
    type=click.Path(),
    help="Path to the YAML configuration file.",
)
@click.option(
    "--log-level",
    "log_level",
    default=None,
    type=click.Choice(["debug", "info", "warn", "warning", "error"], case_sensitive=False),
    help="Override the log level.",
)
@click.option(
    "--logfile",
    "log_file",
    default=None,
    type=click.Path(),
    help="Write JSON log records to this file.",
)
@click.pass_context
def cli(ctx: click.Context, config_path: str | None, log_level: str | None, log_file: str | None) -> None:
    """Filesystem access control for MCP servers."""
    services = ctx.obj if isinstance(ctx.obj, Services) else Services.default()
    loader = ConfigLoader(services)

    try:
        config = _load_config(loader, config_path)
    except ConfigError as exc:
        err_console.print(f"[red]error:[/red] {escape(str(exc))}")
        sys.exit(1)

    handle = configure_logging(
        log_level or config.log_level,
        _resolve_log_path(log_file, config, services),
    )
    ctx.call_on_close(handle.close)
    logger.info("initialized", extra={"config_source": config.source})

    app = App(config, services)
    app.run()
    ctx.obj = _State(app=app)


# ---------------------------------------------------------------------------
# version
# ---------------------------------------------------------------------------


@cli.command(name="version")
def version_command() -> None:
    """Show detailed version information."""
    from mcpfs import __version__

    console.print(
        Panel(
            f"[bold]mcpfs[/bold]  v[cyan]{__version__}[/cyan]\n"
            "Filesystem access control for MCP servers.",
            title="Version",
            border_style="blue",
        )
    )


# ---------------------------------------------------------------------------
# check
# ---------------------------------------------------------------------------


@cli.command(name="check")
@click.option(
    "--op",
    "-o",
    "operation",
    required=True,
    type=click.Choice(_OPERATIONS, case_sensitive=False),
    help="Operation to check.",
)
@click.argument("target_path")
@click.pass_obj
def check_command(state: _State, operation: str, target_path: str) -> None:
    """Decide whether OPERATION on TARGET_PATH is allowed."""
    op = Permission.from_name(operation)
    rule = state.app.match(op, target_path)
    allowed = rule is not None

    status_str = "[green]ALLOWED[/green]" if allowed else "[red]DENIED[/red]"
    console.print(Panel(status_str, title="Permission Check", border_style="blue"))
    console.print(f"  Operation: [cyan]{op}[/cyan]", soft_wrap=True)
    console.print(f"  Path:      [cyan]{escape(target_path)}[/cyan]", soft_wrap=True)
    if rule is not None:
        console.print(
            f"  Matched rule: [bold]{escape(rule.clean_path)}[/bold] ({rule.mask})",
            soft_wrap=True,
        )

    sys.exit(0 if allowed else 1)


# ---------------------------------------------------------------------------
# rules
# ---------------------------------------------------------------------------


@cli.command(name="rules")
@click.pass_obj
def rules_command(state: _State) -> None:
    """List the loaded path rules in evaluation order."""
    config = state.app.config
    rules = config.rules if config is not None else ()

    if not rules:
        console.print("[yellow]No path rules loaded; every request is denied.[/yellow]")
        return

    table = Table(title="Path Rules (first match wins)", box=box.SIMPLE)
    table.add_column("#", style="dim", justify="right")
    table.add_column("Path", style="cyan")
    table.add_column("Perms", style="magenta")
    table.add_column("Subpaths")
    table.add_column("Description")

    for index, rule in enumerate(rules, start=1):
        table.add_row(
            str(index),
            escape(rule.clean_path),
            str(rule.mask),
            "yes" if rule.allow_subpaths else "no",
            escape(rule.description),
        )

    console.print(table)
    console.print(f"  Total rules: [cyan]{len(rules)}[/cyan]")


# ---------------------------------------------------------------------------
# show
# ---------------------------------------------------------------------------


@cli.command(name="show")
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["yaml", "json"]),
    default="yaml",
    show_default=True,
    help="Output format.",
)
@click.pass_obj
def show_command(state: _State, output_format: str) -> None:
    """Print the expanded configuration document."""
    config = state.app.config or Config()
    click.echo(config.to_yaml() if output_format == "yaml" else config.to_json())


if __name__ == "__main__":
    cli()
