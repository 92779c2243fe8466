"""Dependency graph expansion and tree presentation.

Public names are re-exported here so that callers can write
``from icw.core.dependency import build_graph, format_tree``.
"""

from icw.core.dependency.context import BuildContext
from icw.core.dependency.expander import DependencyExpander, build_graph
from icw.core.dependency.tree import (
    DEFAULT_INDENT,
    TreeEntry,
    format_entry,
    format_tree,
    walk_tree,
)

__all__ = [
    "DEFAULT_INDENT",
    "BuildContext",
    "DependencyExpander",
    "TreeEntry",
    "build_graph",
    "format_entry",
    "format_tree",
    "walk_tree",
]
