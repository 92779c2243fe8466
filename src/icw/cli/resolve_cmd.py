"""``icw resolve`` - Resolve the workspace and list every required component.

Builds the full dependency graph and reports each component with its
revision, category, version-control system, and declaring descriptors. A
revision conflict between descriptors fails the command.
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
from icw.cli.output import print_json, print_resolution_table, print_yaml, workspace_to_dict


@click.command("resolve")
@repo_option
@svn_url_option
@timeout_option
@click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json", "yaml"]),
    default="text",
    help="Output format: text (default), json, or yaml.",
)
def resolve_command(
    repo: str | None,
    svn_url: str | None,
    timeout: float | None,
    output_format: str,
) -> None:
    """Resolve all components the workspace requires.

    Exit code 0 on success, 1 on configuration errors or conflicts,
    3 on repository errors.
    """
    with handle_errors():
        workspace = resolve_workspace(repo, svn_url, timeout)

    if output_format == "json":
        print_json(workspace_to_dict(workspace))
    elif output_format == "yaml":
        print_yaml(workspace_to_dict(workspace))
    else:
        print_resolution_table(workspace)
