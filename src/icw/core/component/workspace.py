"""Workspace registry: the single source of truth for component identities.

The ``Workspace`` owns every authoritative ``Component`` of one graph build.
``add_component`` enforces three rules:

- At most one component per identity.
- Re-declaring an identity at the same revision merges the declaring
  sources into the existing entry.
- Re-declaring an identity at a different revision raises
  ``BranchConflictError`` and leaves the existing entry untouched.

Thread safety: This class is NOT thread-safe. Graph builds are sequential.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

from icw.core.component.models import Component
from icw.exceptions import BranchConflictError

logger = logging.getLogger(__name__)

WORKSPACE_CONFIG = "workspace.config"


class Workspace:
    """Registry of the components required by one workspace.

    Attributes:
        root: Absolute path of the workspace directory.
        config_path: Location of the root descriptor.
        components: Identity to authoritative component.
        roots: Components declared by the root descriptor, in declaration
            order.
    """

    def __init__(self, root: Path | str) -> None:
        self.root = Path(root).resolve()
        self.config_path = self.root / WORKSPACE_CONFIG
        self.components: dict[str, Component] = {}
        self.roots: list[Component] = []

    def __len__(self) -> int:
        return len(self.components)

    def __contains__(self, name: object) -> bool:
        return name in self.components

    def __iter__(self) -> Iterator[Component]:
        return iter(self.components.values())

    def add_component(self, component: Component) -> Component:
        """Register a component, enforcing identity and revision consistency.

        Args:
            component: A freshly parsed component declaration.

        Returns:
            The authoritative instance for the identity: ``component`` itself
            when it is new, otherwise the entry registered earlier.

        Raises:
            BranchConflictError: If the identity is registered at another
                revision.
        """
        existing = self.components.get(component.name)
        if existing is None:
            self.components[component.name] = component
            logger.debug(
                "Registered %s (%s) declared by %s",
                component.name, component.revision,
                ", ".join(component.declared_by),
            )
            return component

        if existing.revision != component.revision:
            raise BranchConflictError(
                name=component.name,
                existing_revision=existing.revision,
                new_revision=component.revision,
                existing_sources=tuple(existing.declared_by),
                new_sources=tuple(component.declared_by),
            )

        # Category/VCS of the first declaration wins; only declarers merge.
        existing.merge_declared_by(component.declared_by)
        return existing

    def add_root(self, component: Component) -> Component:
        """Register a root-descriptor component and record it as a root."""
        stored = self.add_component(component)
        if stored not in self.roots:
            self.roots.append(stored)
        return stored

    def get_component(self, name: str) -> Component | None:
        """Retrieve a component by identity, or None if not registered."""
        return self.components.get(name)

    def component_dir(self, component: Component) -> Path:
        """Return the directory a component occupies on local disk."""
        path = Path(component.path)
        if path.is_absolute():
            return path
        return self.root / path
