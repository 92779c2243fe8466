"""``icw test`` - Check the connection to the configured repository.

Works outside a workspace too; then only the options and environment
variables supply the repository settings.
"""

from __future__ import annotations

from pathlib import Path

import click

from icw.cli._common import handle_errors, repo_option, svn_url_option, timeout_option
from icw.cli.output import console
from icw.core.config import find_workspace_root, load_workspace
from icw.exceptions import WorkspaceNotFoundError
from icw.vcs import SvnClient, resolve_settings


@click.command("test")
@repo_option
@svn_url_option
@timeout_option
def connection_command(repo: str | None, svn_url: str | None, timeout: float | None) -> None:
    """Test connectivity to the SVN server and repository."""
    with handle_errors():
        try:
            _, declared = load_workspace(find_workspace_root(Path.cwd()))
        except WorkspaceNotFoundError:
            declared = None
        settings = resolve_settings(repo, svn_url, declared)
        client = SvnClient.from_settings(settings)
        console.print(f"Repository: [bold]{client.repo_url}[/bold]")
        if settings.repo_source:
            console.print(f"  (from {settings.repo_source})", style="dim")
        console.print(f"Username:   {client.username}")
        client.test_connection(timeout=timeout)
    console.print("[bold green]Connection OK[/bold green]")
