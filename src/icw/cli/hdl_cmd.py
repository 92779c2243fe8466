"""``icw hdl`` - Display the dependency tree with HDL file listings.

Only checked-out components are read, so the listing reflects what is on
disk. HDL files are grouped into package, rtl, and behav for every digital
component.
"""

from __future__ import annotations

import click

from icw.cli._common import handle_errors, resolve_workspace
from icw.cli.output import console, print_hdl_tree


@click.command("hdl")
def hdl_command() -> None:
    """Display the dependency tree with HDL files of digital components."""
    with handle_errors():
        workspace = resolve_workspace(None, None, None, remote=False)

    if not workspace.roots:
        console.print("[yellow]No components defined in workspace.config[/yellow]")
        return
    print_hdl_tree(workspace)
