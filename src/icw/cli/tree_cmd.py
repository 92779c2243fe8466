"""``icw tree`` - Display the dependency tree from descriptor files.

Reads workspace.config and every reachable depend.config (from local
checkouts where present, otherwise straight from the repository) and prints
each component once, indented under the component that first declared it.
"""

from __future__ import annotations

import click

from icw.cli._common import (
    handle_errors,
    repo_option,
    resolve_workspace,
    svn_url_option,
    timeout_option,
)
from icw.cli.output import console, print_tree


@click.command("tree")
@repo_option
@svn_url_option
@timeout_option
def tree_command(repo: str | None, svn_url: str | None, timeout: float | None) -> None:
    """Display the component dependency tree.

    Exit code 0 on success, 1 on configuration errors or conflicts,
    3 on repository errors.
    """
    with handle_errors():
        workspace = resolve_workspace(repo, svn_url, timeout)

    if not workspace.roots:
        console.print("[yellow]No components defined in workspace.config[/yellow]")
        return
    print_tree(workspace)
