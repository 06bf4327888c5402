"""Command line interface for cloudseed."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from cloudseed.config import AppConfig, load_raw_config, resolve
from cloudseed.errors import CloudSeedError
from cloudseed.hooks import MachineContext, after_destroy, before_create
from cloudseed.models import CloudInitConfig, RawCloudInitConfig


console = Console()
app = typer.Typer(help="cloudseed - NoCloud cloud-init seeds for container machines")


class ConsoleUI:
    """UI sink printing hook messages to the rich console."""

    def __init__(self, output: Console) -> None:
        self.output = output

    def info(self, message: str) -> None:
        self.output.print(escape(message))

    def success(self, message: str) -> None:
        self.output.print(f"[green]{escape(message)}[/green]")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _load_config(config_path: Path | None, root: Path) -> CloudInitConfig:
    if config_path is None:
        return resolve(RawCloudInitConfig())
    if not config_path.is_absolute():
        config_path = root / config_path
    return resolve(load_raw_config(config_path))


@app.command()
def prepare(
    name: str = typer.Argument(..., help="Machine name"),
    root: Path = typer.Option(Path("."), "--root", help="Project root", resolve_path=True),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Cloud-init YAML file"),
    hostname: Optional[str] = typer.Option(None, help="Declared machine hostname"),
    provider: str = typer.Option(AppConfig().provider, help="Machine provider"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Write the seed directory for a machine and print its volume mount."""
    _setup_logging(verbose)
    machine = MachineContext(name=name, provider=provider, root_path=root, hostname=hostname)

    try:
        resolved = _load_config(config, root)
        result = before_create(machine, resolved, ConsoleUI(console), AppConfig(provider=provider))
    except CloudSeedError as exc:
        console.print(f"[red]Error:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc

    if result.is_empty:
        console.print("[yellow]No cloud-init documents configured.[/yellow]")
        return
    for volume in machine.volumes:
        console.print(f"Volume: [bold]{escape(volume)}[/bold]")


@app.command()
def cleanup(
    name: str = typer.Argument(..., help="Machine name"),
    root: Path = typer.Option(Path("."), "--root", help="Project root", resolve_path=True),
    provider: str = typer.Option(AppConfig().provider, help="Machine provider"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Remove the seed directory of a machine."""
    _setup_logging(verbose)
    machine = MachineContext(name=name, provider=provider, root_path=root)
    after_destroy(machine, ConsoleUI(console), AppConfig(provider=provider))


@app.command()
def show(
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Cloud-init YAML file"),
    root: Path = typer.Option(Path("."), "--root", help="Project root", resolve_path=True),
) -> None:
    """Show the resolved cloud-init documents."""
    try:
        resolved = _load_config(config, root)
    except CloudSeedError as exc:
        console.print(f"[red]Error:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Document")
    table.add_column("Content type")
    table.add_column("Source")
    table.add_column("Active")

    for kind, spec in resolved.items():
        if spec.path:
            source = escape(spec.path)
        elif spec.inline:
            source = "inline"
        else:
            source = "-"
        table.add_row(kind.filename, spec.content_type or "-", source, "yes" if spec.active else "no")

    console.print(table)
