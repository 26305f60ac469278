# src/treemirror/cli.py: Command-Line Interface (CLI) entry point.
# Implemented using Typer, this module provides the 'mirrorctl' command. It
# can mirror an ad-hoc source/destination pair, run the mirrors named in the
# configuration file, and inspect the manifest left in a destination folder.

import re
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from .config import load_config, Config
from .filters import build_filter
from .manifest import FileManifest
from .mirror import DEFAULT_MANIFEST_FILE, mirror
from .util.errors import MirrorError
from .util.fs import file_exists, grep as grep_files
from .util.log import set_level

app = typer.Typer(
    help="Mirror filtered directory trees, removing files left by previous runs."
)
console = Console()

class State:
    config_path: Optional[Path] = None
    verbose: bool = False

state = State()

def fail(message: str, error: MirrorError) -> None:
    console.print(f"[bold red]{message}:[/bold red] {error}")
    raise typer.Exit(error.exit_code)

def get_config() -> Config:
    """Loads the config and handles errors."""
    try:
        return load_config(state.config_path)
    except MirrorError as e:
        fail("Error", e)

@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
    config: Optional[Path] = typer.Option(None, "--config", help="Path to mirrors.yaml."),
):
    state.config_path = config
    state.verbose = verbose
    set_level("DEBUG" if verbose else "INFO")

@app.command()
def copy(
    source: Path = typer.Argument(..., help="Directory to mirror from."),
    destination: Path = typer.Argument(..., help="Directory to mirror into."),
    manifest_file: str = typer.Option(DEFAULT_MANIFEST_FILE, help="Manifest file name used in every directory."),
    exclude: List[str] = typer.Option([], "--exclude", "-e", help="Gitignore-style pattern to skip (repeatable)."),
    include_hidden: bool = typer.Option(False, "--include-hidden", help="Also mirror dotfiles and dot-directories."),
):
    """Mirror SOURCE into DESTINATION."""
    try:
        mirror(
            str(source),
            str(destination),
            manifest_file,
            build_filter(exclude, include_hidden),
        )
    except MirrorError as e:
        fail("Mirror failed", e)
    console.print(f"[bold green]Mirrored {source} -> {destination}[/bold green]")

@app.command()
def run(
    name: Optional[str] = typer.Argument(None, help="Mirror to run. Runs every configured mirror if omitted.")
):
    """Run configured mirrors."""
    config = get_config()
    if not state.verbose:
        set_level(config.logging.level)

    try:
        targets = [config.get_mirror(name)] if name else config.mirrors
    except MirrorError as e:
        fail("Error", e)

    for target in targets:
        try:
            with console.status(f"Mirroring [bold cyan]{target.name}[/bold cyan]...", spinner="dots"):
                mirror(
                    str(target.source),
                    str(target.destination),
                    config.defaults.manifest_file,
                    config.filter_for(target),
                    name=target.name,
                )
        except MirrorError as e:
            fail(f"Mirror '{target.name}' failed", e)
        console.print(f"[bold green]Successfully mirrored: {target.name}[/bold green]")

@app.command()
def status():
    """Show the configured mirrors."""
    config = get_config()

    table = Table("Name", "Source", "Destination", "Exclude", "Hidden")
    for target in config.mirrors:
        exclude = target.exclude if target.exclude is not None else config.defaults.exclude
        include_hidden = (
            target.include_hidden
            if target.include_hidden is not None
            else config.defaults.include_hidden
        )
        table.add_row(
            target.name,
            str(target.source),
            str(target.destination),
            ", ".join(exclude),
            "yes" if include_hidden else "no",
        )
    console.print(table)

@app.command()
def manifest(
    directory: Path = typer.Argument(..., help="Destination directory to inspect."),
    manifest_file: str = typer.Option(DEFAULT_MANIFEST_FILE, help="Manifest file name."),
):
    """List the files recorded in DIRECTORY's manifest."""
    record = FileManifest(str(directory / manifest_file))
    if not file_exists(record.path):
        console.print(f"No manifest at {record.path}")
        raise typer.Exit(1)
    try:
        for entry in record.entries():
            typer.echo(entry)
    except MirrorError as e:
        fail("Error", e)

@app.command()
def grep(
    pattern: str = typer.Argument(..., help="Regular expression to search for."),
    glob_pattern: str = typer.Argument(..., metavar="GLOB", help="Files to search; '**' spans directories."),
):
    """Exit 0 if PATTERN occurs in any file matched by GLOB, 1 otherwise."""
    try:
        regex = re.compile(pattern)
    except re.error as e:
        raise typer.BadParameter(f"Invalid regular expression: {e}", param_hint="PATTERN")

    try:
        found = grep_files(regex, glob_pattern)
    except MirrorError as e:
        fail("Error", e)
    if not found:
        raise typer.Exit(1)
    typer.echo("match")

if __name__ == "__main__":
    app()
