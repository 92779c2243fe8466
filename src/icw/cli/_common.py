"""Shared workspace loading and error reporting for CLI commands.

Exit Codes:
    0 - Success.
    1 - Configuration failure: descriptor syntax error, revision conflict,
        missing repository name, or not inside a workspace.
    3 - Transport failure or cancellation while reading the repository.
"""

from __future__ import annotations

import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

import click

from icw.cli.output import print_error
from icw.core.component import VcsKind, Workspace
from icw.core.config import find_workspace_root, load_workspace
from icw.core.dependency import BuildContext, build_graph
from icw.exceptions import (
    BranchConflictError,
    ConfigSyntaxError,
    ConfigurationError,
    OperationCancelledError,
    TransportError,
)
from icw.vcs import Settings, SvnClient, resolve_settings

EXIT_CONFIG_ERROR = 1
EXIT_TRANSPORT_ERROR = 3

repo_option = click.option(
    "--repo", default=None, help="Repository name (overrides ICW_REPO and workspace.config)."
)
svn_url_option = click.option(
    "--svn-url", default=None, help="SVN server URL (overrides ICW_SVN_URL and workspace.config)."
)
timeout_option = click.option(
    "--timeout",
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help="Abort the build after this many seconds.",
)


@contextmanager
def handle_errors() -> Iterator[None]:
    """Turn ICW exceptions into an error panel and an exit code."""
    try:
        yield
    except ConfigSyntaxError as exc:
        print_error("Syntax Error", str(exc), "Fix the descriptor line and try again.")
        sys.exit(EXIT_CONFIG_ERROR)
    except BranchConflictError as exc:
        print_error(
            "Version Conflict", str(exc),
            "Make every descriptor request the same revision of this component.",
        )
        sys.exit(EXIT_CONFIG_ERROR)
    except ConfigurationError as exc:
        print_error("Configuration Error", str(exc))
        sys.exit(EXIT_CONFIG_ERROR)
    except OperationCancelledError as exc:
        print_error("Cancelled", str(exc), "Retry with a larger --timeout.")
        sys.exit(EXIT_TRANSPORT_ERROR)
    except TransportError as exc:
        print_error(
            "Repository Error", str(exc),
            "Check the server URL, your network connection, and your credentials.",
        )
        sys.exit(EXIT_TRANSPORT_ERROR)


def load_settings(repo: str | None, svn_url: str | None) -> tuple[Workspace, Settings]:
    """Load the enclosing workspace and resolve its repository settings."""
    root = find_workspace_root(Path.cwd())
    workspace, declared = load_workspace(root)
    return workspace, resolve_settings(repo, svn_url, declared)


def resolve_workspace(
    repo: str | None,
    svn_url: str | None,
    timeout: float | None,
    remote: bool = True,
) -> Workspace:
    """Load the enclosing workspace and expand its dependency graph.

    Args:
        repo: Repository name from the command line.
        svn_url: Server URL from the command line.
        timeout: Build deadline in seconds.
        remote: Read descriptors of components that are not checked out
            from the repository. When False only local checkouts are read.
    """
    workspace, settings = load_settings(repo, svn_url)
    sources = {}
    if remote and len(workspace):
        sources[VcsKind.SVN] = SvnClient.from_settings(settings)
    return build_graph(workspace, sources, BuildContext(timeout=timeout))
