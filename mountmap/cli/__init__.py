"""
Command-Line Interface

CLI commands for MountMap operations.

Commands:
    mountmap serve    - Serve a manifest's overlay over HTTP
    mountmap get      - Read a map path
    mountmap set      - Write a map path (in memory) and show the change events
    mountmap info     - Display mounts and reference health
    mountmap flatten  - Flatten a JSON file into a path-keyed map
    mountmap expand   - Rebuild a JSON document from a flat map file

Usage:
    # Serve
    mountmap serve ./manifest.json --port 8080

    # Read the whole network subtree
    mountmap get ./manifest.json network --depth -1

    # Dry-run a write
    mountmap set ./manifest.json network.port 5433

    # Show mounts
    mountmap info ./manifest.json
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from mountmap.errors import MountMapError

if TYPE_CHECKING:
    from mountmap.api.overlay import Overlay
    from mountmap.config.settings import MapConfig

__all__ = ["main", "app"]

app = typer.Typer(
    name="mountmap",
    help="Unified tree over mounted JSON documents",
    no_args_is_help=True,
)
console = Console()

_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _load_config(config_path: Optional[Path]) -> "MapConfig":
    """Build configuration from .env, environment and an optional TOML file."""
    from mountmap.config import MapConfig

    load_dotenv()
    config = MapConfig.from_file(config_path) if config_path else MapConfig()
    logging.basicConfig(level=config.log_level, format=_LOG_FORMAT)
    return config


def _open(manifest: Path, config_path: Optional[Path]) -> "Overlay":
    """Load an overlay, turning setup errors into a clean exit."""
    from mountmap.api.overlay import Overlay

    try:
        return Overlay.from_file(manifest, config=_load_config(config_path))
    except MountMapError as e:
        console.print(f"[red]Error:[/] {e}")
        raise typer.Exit(code=1)


def _print_json(value: Any) -> None:
    console.print_json(data=value)


def _read_json_file(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        console.print(f"[red]Invalid JSON in {path}:[/] {e}")
        raise typer.Exit(code=1)


_MANIFEST_ARG = typer.Argument(..., help="Manifest JSON file", exists=True, dir_okay=False)
_CONFIG_OPT = typer.Option(None, "--config", "-c", help="TOML config file", exists=True)


@app.command()
def serve(
    manifest: Path = _MANIFEST_ARG,
    host: Optional[str] = typer.Option(None, "--host", help="Bind address"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Port"),
    config: Optional[Path] = _CONFIG_OPT,
) -> None:
    """Serve the overlay over HTTP."""
    from mountmap.server import run_server

    overlay = _open(manifest, config)
    run_server(overlay, host=host, port=port)


@app.command("get")
def get_value(
    manifest: Path = _MANIFEST_ARG,
    path: str = typer.Argument("", help="Map path (dot or slash separated)"),
    depth: Optional[int] = typer.Option(None, "--depth", "-d", help="Render depth (-1 = unlimited)"),
    flat: bool = typer.Option(False, "--flat", help="Print the flat encoding instead"),
    config: Optional[Path] = _CONFIG_OPT,
) -> None:
    """Read a map path."""
    from mountmap.types.json import NOT_FOUND

    overlay = _open(manifest, config)
    value = overlay.flatten(path) if flat else overlay.render(path, depth=depth)
    if value is NOT_FOUND:
        console.print(f"[red]Not found:[/] {path or '/'}")
        raise typer.Exit(code=1)
    _print_json(value)


@app.command("set")
def set_value(
    manifest: Path = _MANIFEST_ARG,
    path: str = typer.Argument(..., help="Map path of a leaf"),
    value: str = typer.Argument(..., help="JSON value (bare words are coerced like query strings)"),
    config: Optional[Path] = _CONFIG_OPT,
) -> None:
    """Write a map path in memory and show the resulting change events."""
    from mountmap.core.events import ALL_MOUNTS
    from mountmap.types.events import ChangeEvent
    from mountmap.utils.coercion import parse_value

    overlay = _open(manifest, config)
    events: list[ChangeEvent] = []
    overlay.subscribe(ALL_MOUNTS, events.append)

    if not overlay.set(path, parse_value(value)):
        console.print(f"[red]Write rejected:[/] {path}")
        raise typer.Exit(code=1)

    table = Table(title="Change Events")
    table.add_column("Mount", style="cyan")
    table.add_column("Path")
    table.add_column("Value", style="green")
    for event in events:
        table.add_row(event.mount, event.path, json.dumps(event.value))
    console.print(table)
    _print_json(overlay.render(path, depth=-1))
    console.print("[dim]In-memory only: mounted files were not modified.[/]")


@app.command()
def info(
    manifest: Path = _MANIFEST_ARG,
    config: Optional[Path] = _CONFIG_OPT,
) -> None:
    """Display mounts and reference health."""
    overlay = _open(manifest, config)
    details = overlay.info()

    table = Table(title=f"Mounts: {manifest}")
    table.add_column("Mount", style="cyan")
    table.add_column("Kind")
    table.add_column("Size", justify="right", style="green")
    table.add_column("Source", style="dim")
    for mount in details.mounts:
        table.add_row(mount.name, mount.kind, str(mount.size), mount.source or "")
    console.print(table)
    console.print(f"References: {details.references}")

    if details.invalid_references:
        console.print("[yellow]Invalid references:[/]")
        for issue in details.invalid_references:
            console.print(f"  - {issue.map_path} -> {issue.reference} (no mount {issue.mount!r})")


@app.command("flatten")
def flatten_file(
    file: Path = typer.Argument(..., help="JSON document", exists=True, dir_okay=False),
) -> None:
    """Flatten a JSON document into a path-keyed map."""
    from mountmap.core.flatten import flatten

    _print_json(flatten(_read_json_file(file)))


@app.command("expand")
def expand_file(
    file: Path = typer.Argument(..., help="Flat map JSON file", exists=True, dir_okay=False),
) -> None:
    """Rebuild a JSON document from a flat map."""
    from mountmap.core.flatten import expand

    flat = _read_json_file(file)
    if not isinstance(flat, dict):
        console.print("[red]A flat map must be a JSON object[/]")
        raise typer.Exit(code=1)
    _print_json(expand(flat))


def main() -> None:
    """Entry point for the CLI."""
    app()
