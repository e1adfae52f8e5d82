"""Typer-based CLI for ImportGraph."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.progress import BarColumn, Progress, TextColumn
from rich.table import Table

from . import __version__, config
from .aggregator import ImportAggregator
from .cli_config import config_app
from .graph import DependencyGraph
from .graph_export import export_dot, export_html, export_json
from .manifest import generate_requirements, write_requirements
from .models import ScanResult
from .pypi import get_package_versions
from .stdlib import classify

console = Console()

app = typer.Typer(
    help="🔗 ImportGraph CLI: map a Python project's imports and generate requirements.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.add_typer(config_app, name="config")

KIND_STYLES = {"file": "blue", "stdlib": "bright_black", "thirdParty": "magenta"}


def version_callback(value: bool):
    """Print version and exit."""
    if value:
        typer.echo(f"ImportGraph CLI v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log scan progress to stderr."),
):
    """ImportGraph CLI: find imports, split stdlib from third-party, explore the dependency graph."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def _scan(project_path: Path, workers: Optional[int] = None, quiet: bool = False) -> ScanResult:
    """Scan *project_path*, showing a progress bar unless *quiet*."""
    if quiet:
        return ImportAggregator(max_workers=workers or config.MAX_WORKERS).scan_directory(project_path)

    with Progress(
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TextColumn("{task.completed}/{task.total}"),
        console=console,
        transient=True,
    ) as progress:
        task = progress.add_task("[cyan]Scanning...", total=None)

        def on_progress(index: int, total: int, name: str) -> None:
            progress.update(task, description=f"[cyan]Analyzing {name.split('/')[-1]}", completed=index, total=total)

        aggregator = ImportAggregator(on_progress=on_progress, max_workers=workers or config.MAX_WORKERS)
        result = aggregator.scan_directory(project_path)

    for name in result.skipped:
        console.print(f"[yellow]⚠[/yellow] Skipped unreadable file: {name}")
    return result


def _require_files(result: ScanResult) -> None:
    if not result.files:
        console.print("[red]✗[/red] No Python files found.")
        raise typer.Exit(code=1)


ProjectPath = typer.Argument(..., exists=True, file_okay=False, help="Path to the Python project.")


@app.command("scan")
def scan(
    project_path: Path = ProjectPath,
    as_json: bool = typer.Option(False, "--json", help="Print the scan as JSON."),
    workers: Optional[int] = typer.Option(None, "--workers", "-w", min=1, max=32, help="Parallel file workers."),
):
    """Scan a project and list each file's imports."""
    result = _scan(project_path, workers, quiet=as_json)

    if as_json:
        typer.echo(json.dumps(result.to_dict(), indent=2))
        return

    _require_files(result)

    table = Table(title="Imports by file", show_header=True, show_lines=False)
    table.add_column("File", style="cyan")
    table.add_column("Imports")
    for name, imports in result.files.items():
        rendered = ", ".join(f"[{KIND_STYLES[classify(imp)]}]{imp}[/]" for imp in imports)
        table.add_row(name, rendered or "[dim]none[/dim]")
    console.print(table)

    console.print(
        f"\nFiles: {result.total_files} | Imports: {result.total_imports} | "
        f"Third-party: {len(result.third_party_imports)} | Stdlib: {len(result.stdlib_imports)}"
    )
    if result.third_party_imports:
        console.print(f"📦 Third-party: {', '.join(result.third_party_imports)}")


@app.command("graph")
def graph(
    project_path: Path = ProjectPath,
    fmt: str = typer.Option("html", "--format", "-f", help="Export format: html, dot or json."),
    focus: str = typer.Option("", "--focus", help="Node id or name to export only its neighbourhood."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Output file path."),
):
    """Export the file/import graph to standalone HTML, Graphviz DOT, or JSON."""
    fmt = fmt.lower()
    if fmt not in {"html", "dot", "json"}:
        raise typer.BadParameter("Format must be one of: html, dot, json")

    result = _scan(project_path)
    _require_files(result)
    model = DependencyGraph.from_scan(result)

    if output is None:
        output = Path.cwd() / f"{project_path.resolve().name}_imports.{fmt}"

    if fmt == "html":
        export_html(model, output, focus=focus)
    elif fmt == "dot":
        export_dot(model, output, focus=focus)
    else:
        export_json(model, output, focus=focus)

    typer.echo(f"Exported graph to {output}")
    typer.echo(f"Nodes: {len(model.nodes)} | Edges: {len(model.edges)}")


@app.command("neighbors")
def neighbors(
    project_path: Path = ProjectPath,
    node_id: str = typer.Argument(..., help="Node id, e.g. 'file:app/main.py' or 'import:requests'."),
):
    """Show a node's direct neighbours and incident edges."""
    model = DependencyGraph.from_scan(_scan(project_path, quiet=True), index=True)
    if node_id not in model:
        raise typer.BadParameter(f"Node '{node_id}' not found. Try 'ig search' to find node ids.")

    for other in sorted(model.neighbors(node_id) - {node_id}):
        node = model.get(other)
        typer.echo(f"[{node.kind}] {node.id}")
    typer.echo(f"Edges: {len(model.incident_edges(node_id))}")


@app.command("search")
def search(
    project_path: Path = ProjectPath,
    query: str = typer.Argument(..., help="Case-insensitive substring of a file or module name."),
    limit: int = typer.Option(config.SEARCH_LIMIT, min=1, max=100, help="Maximum number of matches."),
):
    """Find graph nodes by name."""
    model = DependencyGraph.from_scan(_scan(project_path, quiet=True))
    matches = model.search(query, limit=limit)
    if not matches:
        typer.echo("No matching nodes.")
        raise typer.Exit(code=0)
    for node in matches:
        typer.echo(f"[{node.kind}] {node.id}  ({node.full_name})")


@app.command("classify")
def classify_modules(names: List[str] = typer.Argument(..., help="Module names, e.g. os.path numpy.")):
    """Tell whether modules are standard library or third-party."""
    for name in names:
        typer.echo(f"{name}: {classify(name)}")


@app.command("requirements")
def requirements(
    project_path: Path = ProjectPath,
    fetch_versions: bool = typer.Option(True, "--versions/--no-versions", help="Pin latest versions from PyPI."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write to this file instead of stdout."),
):
    """Generate requirements.txt from the project's third-party imports."""
    result = _scan(project_path, quiet=output is None)
    _require_files(result)

    versions = {}
    if fetch_versions and result.third_party_imports:
        if output is not None:
            console.print(f"[cyan]Fetching versions for {len(result.third_party_imports)} packages...[/cyan]")
        versions = get_package_versions(result.third_party_imports)

    if output is None:
        typer.echo(generate_requirements(result.third_party_imports, versions))
        return

    write_requirements(output, result.third_party_imports, versions)
    unresolved = [name for name in result.third_party_imports if not versions.get(name)]
    console.print(f"[green]✓[/green] Wrote {len(result.third_party_imports)} packages to {output}")
    if fetch_versions and unresolved:
        console.print(f"[yellow]⚠[/yellow] Unresolved on PyPI: {', '.join(unresolved)}")


if __name__ == "__main__":
    app()
