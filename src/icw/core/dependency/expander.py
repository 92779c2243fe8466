"""Breadth-first dependency graph expansion.

Starting from the components of the root descriptor, the expander reads each
component's ``depend.config``, registers what it declares, and queues the
new components for the same treatment until nothing new turns up.

Algorithm
---------
1. Seed a FIFO queue with the workspace roots, in declaration order.
2. Pop a component. Skip it if it was already expanded in this build,
   otherwise mark it expanded. This bounds the work to one descriptor per
   identity, so cyclic descriptors terminate.
3. Local references are never read.
4. Read ``depend.config``: from disk when the file exists in the component
   directory, otherwise from the repository at the component's revision
   unless the directory is a working copy. A missing descriptor means no
   dependencies.
5. Parse the whole descriptor; a syntax error aborts the build before any
   of its components is registered.
6. Register each declared component. A revision conflict aborts the build.
7. Attach the authoritative instance to the parent's ``dependencies`` and
   queue it unless it was already expanded.

The build is strictly sequential: conflict detection relies on every earlier
registration being visible.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Mapping

from icw.core.component.models import Component, VcsKind
from icw.core.component.workspace import Workspace
from icw.core.config.files import DEPEND_CONFIG
from icw.core.config.parser import ParsedDescriptor, parse_descriptor, read_descriptor
from icw.core.dependency.context import BuildContext
from icw.vcs.base import DescriptorSource

logger = logging.getLogger(__name__)


class DependencyExpander:
    """Expands a loaded workspace into its full dependency graph.

    An expander is single-use: each graph build needs a fresh ``Workspace``
    and a fresh expander.

    Args:
        workspace: Registry already holding the root components.
        sources: Descriptor reader per version-control kind. Kinds without a
            reader are only read from local checkouts.
        context: Deadline and cancellation flag for the build.
    """

    def __init__(
        self,
        workspace: Workspace,
        sources: Mapping[VcsKind, DescriptorSource] | None = None,
        context: BuildContext | None = None,
    ) -> None:
        self._workspace = workspace
        self._sources = dict(sources or {})
        self._context = context or BuildContext()
        self._started = False

    def expand(self) -> Workspace:
        """Run the expansion and return the populated workspace.

        Raises:
            ConfigSyntaxError: A dependency descriptor has a malformed line.
            DescriptorReadError: A local descriptor cannot be read or decoded.
            BranchConflictError: Two declarations disagree on a revision.
            TransportError: A remote descriptor could not be read.
            OperationCancelledError: The build was cancelled or timed out.
            RuntimeError: If this expander was already used.
        """
        if self._started:
            raise RuntimeError("DependencyExpander instances are single-use")
        self._started = True

        expanded: set[str] = set()
        queue: deque[Component] = deque(self._workspace.roots)

        while queue:
            self._context.check()
            component = queue.popleft()
            if component.name in expanded:
                continue
            expanded.add(component.name)

            if component.is_local:
                logger.debug("Skipping local reference %s", component.name)
                continue

            parsed = self._load_descriptor(component)
            if parsed is None:
                continue
            parsed.raise_for_errors()
            if not parsed.settings.is_empty:
                logger.debug("Ignoring set directives in %s", parsed.source)

            for declared in parsed.components:
                stored = self._workspace.add_component(declared)
                if not component.has_dependency(stored.name):
                    component.dependencies.append(stored)
                if stored.name not in expanded:
                    queue.append(stored)

            if component.dependencies:
                logger.info(
                    "%s: %d dependenc%s",
                    component.name,
                    len(component.dependencies),
                    "y" if len(component.dependencies) == 1 else "ies",
                )

        logger.info("Resolved %d component(s)", len(self._workspace))
        return self._workspace

    def _load_descriptor(self, component: Component) -> ParsedDescriptor | None:
        """Parse the depend.config of a component, or return None if absent.

        A depend.config present on disk wins over the repository copy. A
        working copy without one has no dependencies.
        """
        local_dir = self._workspace.component_dir(component)
        local_file = local_dir / DEPEND_CONFIG
        if local_file.is_file():
            logger.debug("Reading %s", local_file)
            return read_descriptor(local_file, declared_by=component.name)

        reader = self._sources.get(component.vcs)
        if reader is None:
            logger.info(
                "No %s reader configured; %s has no local %s, "
                "treating it as having no dependencies",
                component.vcs.value, component.name, DEPEND_CONFIG,
            )
            return None
        if reader.is_checked_out_locally(local_dir):
            return None

        self._context.check()
        logger.debug("Fetching %s of %s@%s", DEPEND_CONFIG, component.name, component.revision)
        text = reader.fetch_descriptor_text(
            component, DEPEND_CONFIG, timeout=self._context.remaining()
        )
        if text is None:
            return None
        return parse_descriptor(
            text,
            source=f"{component.name}@{component.revision}/{DEPEND_CONFIG}",
            declared_by=component.name,
        )


def build_graph(
    workspace: Workspace,
    sources: Mapping[VcsKind, DescriptorSource] | None = None,
    context: BuildContext | None = None,
) -> Workspace:
    """Expand ``workspace`` in place with a fresh ``DependencyExpander``."""
    return DependencyExpander(workspace, sources, context).expand()
