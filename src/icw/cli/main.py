"""ICW CLI - IC workspace dependency management.

Entry point for the ``icw`` command-line tool. Registers all subcommands
under a single Click group.

Commands:
    init     - Create a workspace.config template.
    tree     - Display the dependency tree from descriptor files.
    resolve  - List every required component, or export it as JSON/YAML.
    hdl      - Display the dependency tree with HDL file listings.
    test     - Check the connection to the repository.

Environment Variables:
    ICW_REPO          Repository name.
    ICW_SVN_URL       SVN server URL (default: svn://anyvej11.dk).
    ICW_SVN_PASSWORD  SVN password (else ~/.icw/credentials).
    USER              Username for SVN authentication.

Usage::

    export ICW_REPO=icworks
    icw test
    icw tree
    icw resolve --format yaml
"""

from __future__ import annotations

import logging

import click
from rich.logging import RichHandler

from icw import __version__
from icw.cli.connection_cmd import connection_command
from icw.cli.hdl_cmd import hdl_command
from icw.cli.init_cmd import init_command
from icw.cli.output import err_console
from icw.cli.resolve_cmd import resolve_command
from icw.cli.tree_cmd import tree_command

_VERBOSITY_LEVELS = {0: logging.WARNING, 1: logging.INFO}


def _configure_logging(verbose: int) -> None:
    """Route ``icw`` log records to stderr through Rich."""
    package_logger = logging.getLogger("icw")
    package_logger.setLevel(_VERBOSITY_LEVELS.get(verbose, logging.DEBUG))
    if not any(isinstance(h, RichHandler) for h in package_logger.handlers):
        package_logger.addHandler(
            RichHandler(console=err_console, show_time=False, show_path=False)
        )


@click.group()
@click.version_option(version=__version__, prog_name="icw")
@click.option("-v", "--verbose", count=True, help="Increase log output (-v info, -vv debug).")
def cli(verbose: int) -> None:
    """ICW: manage dependencies between analog and digital components.

    Design components are stored in Subversion, software tools in Git.
    """
    _configure_logging(verbose)


# Register all subcommands
cli.add_command(init_command)
cli.add_command(tree_command)
cli.add_command(resolve_command)
cli.add_command(hdl_command)
cli.add_command(connection_command)
