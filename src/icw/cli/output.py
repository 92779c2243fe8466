"""Rich output formatting helpers for the ICW CLI.

Tree listings go through ``click.echo`` as plain text so that revision and
category brackets are never read as Rich markup. Tables, panels, and error
messages use Rich.
"""

from __future__ import annotations

import json
from typing import Any

import click
import yaml
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from icw.core.component import Category, Component, VcsKind, Workspace
from icw.core.dependency import format_entry, walk_tree
from icw.core.hdl import discover_files, shorten_path

_CATEGORY_STYLES: dict[Category, str] = {
    Category.ANALOG: "magenta",
    Category.DIGITAL: "cyan",
    Category.SETUP: "yellow",
    Category.PROCESS: "blue",
    Category.TOOLS: "green",
}

console = Console()
err_console = Console(stderr=True)


def category_style(category: Category) -> str:
    """Return the Rich style string for a component category."""
    return _CATEGORY_STYLES.get(category, "white")


def print_tree(workspace: Workspace) -> None:
    """Print the dependency tree of a resolved workspace."""
    console.print("[cyan]Dependency tree for workspace[/cyan]")
    console.print()
    for entry in walk_tree(workspace.roots):
        click.echo(format_entry(entry))


def print_hdl_tree(workspace: Workspace) -> None:
    """Print the dependency tree with HDL file listings.

    Only digital components that are not local references are searched for
    HDL files.
    """
    console.print("[cyan]Dependency tree with HDL files[/cyan]")
    console.print()
    for entry in walk_tree(workspace.roots):
        comp = entry.component
        pad = "  " * entry.depth
        click.echo(f"{pad}{comp.name} ({comp.path}), {comp.revision}")
        if comp.category is not Category.DIGITAL or comp.vcs is VcsKind.LOCAL:
            continue
        hdl_files = discover_files(workspace.component_dir(comp))
        for kind, paths in hdl_files.groups():
            listed = " ".join(shorten_path(p, workspace.root) for p in paths)
            click.echo(f"{pad}  - {kind.value}: {listed}")


def print_resolution_table(workspace: Workspace) -> None:
    """Print a table of every resolved component."""
    console.print(
        Panel("[bold green]Resolution successful[/bold green]",
              title="Dependency Resolution")
    )
    if not len(workspace):
        console.print("[dim]No components defined in workspace.config.[/dim]")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("Component", style="bold")
    table.add_column("Revision")
    table.add_column("Category", justify="center")
    table.add_column("VCS", justify="center")
    table.add_column("Declared By", style="dim")
    for name in sorted(workspace.components):
        comp = workspace.components[name]
        table.add_row(
            comp.name,
            comp.revision,
            Text(comp.category.value, style=category_style(comp.category)),
            comp.vcs.value,
            ", ".join(comp.declared_by),
        )
    console.print(table)
    console.print(f"[bold]{len(workspace)}[/bold] component(s) resolved")


def component_to_dict(component: Component) -> dict[str, Any]:
    return {
        "name": component.name,
        "path": component.path,
        "category": component.category.value,
        "revision": component.revision,
        "vcs": component.vcs.value,
        "declared_by": list(component.declared_by),
        "dependencies": [dep.name for dep in component.dependencies],
    }


def workspace_to_dict(workspace: Workspace) -> dict[str, Any]:
    """Convert a resolved workspace to a JSON/YAML-serializable dict."""
    return {
        "workspace": str(workspace.root),
        "roots": [comp.name for comp in workspace.roots],
        "components": [
            component_to_dict(workspace.components[name])
            for name in sorted(workspace.components)
        ],
    }


def print_json(data: Any) -> None:
    """Print data as indented JSON to stdout."""
    click.echo(json.dumps(data, indent=2, default=str))


def print_yaml(data: Any) -> None:
    """Print data as block-style YAML to stdout."""
    click.echo(yaml.safe_dump(data, sort_keys=False, default_flow_style=False), nl=False)


def print_error(title: str, message: str, hint: str | None = None) -> None:
    """Print an error panel to stderr, with an optional remediation hint."""
    err_console.print(Panel(Text(message, style="red"), title=title, border_style="red"))
    if hint:
        err_console.print(f"[yellow]{hint}[/yellow]")
