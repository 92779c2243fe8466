"""``icw init [dir]`` - Create a commented workspace.config template."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from icw.cli._common import EXIT_CONFIG_ERROR
from icw.cli.output import console, print_error
from icw.core.config import create_workspace_config
from icw.exceptions import WorkspaceExistsError


@click.command("init")
@click.argument(
    "directory",
    type=click.Path(exists=True, file_okay=False),
    default=".",
)
def init_command(directory: str) -> None:
    """Create workspace.config in DIRECTORY (default: current directory)."""
    try:
        path = create_workspace_config(Path(directory))
    except WorkspaceExistsError as exc:
        print_error("Workspace Exists", str(exc))
        sys.exit(EXIT_CONFIG_ERROR)
    console.print(f"[green]Created {path}[/green]")
    console.print("Edit workspace.config to add components, then run 'icw tree'.")
