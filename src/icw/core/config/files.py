"""Workspace descriptor files: discovery, creation, and loading."""

from __future__ import annotations

import logging
from pathlib import Path

from icw.core.component.models import ROOT_DECLARER
from icw.core.component.workspace import WORKSPACE_CONFIG, Workspace
from icw.core.config.parser import DescriptorSettings, read_descriptor
from icw.exceptions import WorkspaceExistsError, WorkspaceNotFoundError

logger = logging.getLogger(__name__)

DEPEND_CONFIG = "depend.config"

WORKSPACE_TEMPLATE = """\
# ICW Workspace Configuration
#
# Syntax:
#   use component("path/to/component", "type", "branch")
#   use component("path/to/component", "type")          # defaults to trunk
#   use component("path/to/component")                  # infers type from path
#   use ref("/absolute/path/to/local/component")        # local reference
#
# Repository settings (environment variables take precedence):
#   set repo "repo_name"
#   set svn_url "svn://server"
#
# Types: analog, digital, setup, process, tools
# VCS: analog/digital/setup/process use SVN, tools use Git
#
# Examples:
#   use component("analog/bias", "analog", "trunk")
#   use component("digital/top", "digital", "tags/v1.0")
#   use component("setup/analog", "setup")
#   use component("tools/cad_utils", "tools", "main")   # Git branch

"""


def workspace_exists(directory: Path) -> bool:
    """Return True if ``directory`` contains a workspace.config file."""
    return (directory / WORKSPACE_CONFIG).is_file()


def find_workspace_root(start: Path | None = None) -> Path:
    """Find the workspace root by walking up from ``start``.

    Args:
        start: Directory to begin the search in. Defaults to the current
            working directory.

    Returns:
        The first directory (``start`` or an ancestor) holding a
        workspace.config.

    Raises:
        WorkspaceNotFoundError: If no ancestor holds a workspace.config.
    """
    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        if workspace_exists(directory):
            return directory
    raise WorkspaceNotFoundError(
        f"not in an ICW workspace (no {WORKSPACE_CONFIG} found in {current} "
        "or its parents)"
    )


def create_workspace_config(directory: Path) -> Path:
    """Write a commented workspace.config template into ``directory``.

    Returns:
        Path of the created file.

    Raises:
        WorkspaceExistsError: If the directory already holds one.
    """
    config_path = directory / WORKSPACE_CONFIG
    if config_path.exists():
        raise WorkspaceExistsError(f"{config_path} already exists")
    config_path.write_text(WORKSPACE_TEMPLATE, encoding="utf-8")
    logger.info("Created %s", config_path)
    return config_path


def load_workspace(root: Path) -> tuple[Workspace, DescriptorSettings]:
    """Parse a workspace's root descriptor into a fresh registry.

    Every declared component is registered as a root in declaration order.
    Duplicate declarations obey the registry rules: same revision merges,
    different revision conflicts.

    Returns:
        The populated ``Workspace`` and the descriptor's ``set`` settings.

    Raises:
        ConfigSyntaxError: For the first malformed line.
        BranchConflictError: For conflicting root declarations.
        DescriptorReadError: If workspace.config cannot be read or decoded.
    """
    workspace = Workspace(root)
    parsed = read_descriptor(workspace.config_path, declared_by=ROOT_DECLARER)
    parsed.raise_for_errors()
    for component in parsed.components:
        workspace.add_root(component)
    logger.info(
        "Loaded %d component(s) from %s", len(workspace.roots), workspace.config_path
    )
    return workspace, parsed.settings
