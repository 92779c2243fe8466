"""Read surface of a version-control backend.

The dependency expander needs only two things from version control: read a
descriptor file straight from the repository, and tell whether a component
is already checked out locally. ``DescriptorSource`` captures exactly that,
so the expander can be driven by the real Subversion client or by an
in-memory fake in tests.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from icw.core.component.models import Component


class DescriptorSource(ABC):
    """Abstract base class for descriptor readers."""

    @abstractmethod
    def fetch_descriptor_text(
        self,
        component: Component,
        filename: str,
        *,
        timeout: float | None = None,
    ) -> str | None:
        """Read a file of ``component`` at its revision from the repository.

        Args:
            component: Component whose file to read.
            filename: File name relative to the component root.
            timeout: Seconds before the read is abandoned. None waits
                indefinitely.

        Returns:
            The file text, or None if the file does not exist.

        Raises:
            TransportError: For any failure other than a missing file.
            OperationCancelledError: If ``timeout`` expires.
        """

    @abstractmethod
    def is_checked_out_locally(self, path: Path) -> bool:
        """Return True if ``path`` is a working copy of this backend.

        Only consulted when ``path`` holds no depend.config: a working copy
        without one has no dependencies, any other directory is read from
        the repository.
        """
