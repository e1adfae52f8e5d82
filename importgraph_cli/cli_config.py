"""`ig config` commands: inspect and change ~/.importgraph/config.toml."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from . import config
from .config_manager import KNOWN_KEYS, load_full_config, save_setting

console = Console()

config_app = typer.Typer(
    help="⚙️  Configuration: scan workers and PyPI settings.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


@config_app.command("show")
def show_config():
    """Show effective settings and where they come from."""
    stored = load_full_config()
    effective = {
        "scan": {"max_workers": config.MAX_WORKERS},
        "pypi": {
            "api_base": config.PYPI_API_BASE,
            "timeout": config.PYPI_TIMEOUT,
            "batch_size": config.PYPI_BATCH_SIZE,
        },
    }

    table = Table(title=f"Config ({config.CONFIG_FILE})", show_header=True)
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    table.add_column("Source", style="dim")
    for section, values in effective.items():
        for key, value in values.items():
            if key in stored.get(section, {}):
                value, source = stored[section][key], "config.toml"
            else:
                source = "default"
            table.add_row(f"{section}.{key}", str(value), source)
    console.print(table)


@config_app.command("set")
def set_config(
    key: str = typer.Argument(..., help="Setting as section.key, e.g. scan.max_workers."),
    value: str = typer.Argument(..., help="New value."),
):
    """Store a setting in config.toml (takes effect on the next run)."""
    section, _, name = key.partition(".")
    if name not in KNOWN_KEYS.get(section, {}):
        known = ", ".join(f"{s}.{k}" for s, keys in KNOWN_KEYS.items() for k in keys)
        raise typer.BadParameter(f"Unknown setting '{key}'. Known settings: {known}")
    try:
        saved = save_setting(section, name, value)
    except ValueError:
        raise typer.BadParameter(f"Invalid value for {key}: {value!r}")
    if not saved:
        console.print(f"[red]✗[/red] Could not write {config.CONFIG_FILE}")
        raise typer.Exit(code=1)
    console.print(f"[green]✓[/green] {key} = {value}")
