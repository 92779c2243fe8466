"""Read-only depth-first presentation of a resolved dependency graph."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator

from icw.core.component.models import Component

DEFAULT_INDENT = 2


@dataclass(frozen=True)
class TreeEntry:
    """One printed node of the dependency tree.

    Attributes:
        component: The component at this position.
        depth: Nesting level, 0 for root-descriptor components.
    """

    component: Component
    depth: int


def walk_tree(roots: Iterable[Component]) -> Iterator[TreeEntry]:
    """Yield components depth-first, pre-order, each identity once.

    A component reachable along several paths (a diamond) is yielded at
    its first position only; cycles are cut at the repeated identity.
    """
    visited: set[str] = set()
    # Explicit stack of (component, depth); children pushed in reverse so
    # they pop in declaration order.
    stack: list[tuple[Component, int]] = [(c, 0) for c in reversed(list(roots))]
    while stack:
        component, depth = stack.pop()
        if component.name in visited:
            continue
        visited.add(component.name)
        yield TreeEntry(component, depth)
        for dep in reversed(component.dependencies):
            if dep.name not in visited:
                stack.append((dep, depth + 1))


def format_entry(entry: TreeEntry, indent: int = DEFAULT_INDENT) -> str:
    """Render one entry as ``name (revision) [category]``."""
    comp = entry.component
    return f"{' ' * (indent * entry.depth)}{comp.name} ({comp.revision}) [{comp.category.value}]"


def format_tree(roots: Iterable[Component], indent: int = DEFAULT_INDENT) -> list[str]:
    """Render the whole tree, one line per component."""
    return [format_entry(entry, indent) for entry in walk_tree(roots)]
