"""ICW exception hierarchy.

All public exceptions inherit from IcwError, giving callers a single base
class to catch when they want to handle any ICW-specific failure without
swallowing unrelated errors.

The CLI distinguishes two families: configuration failures
(``ConfigSyntaxError``, ``BranchConflictError``, ``ConfigurationError``),
which the user fixes by editing descriptors or settings, and transport
failures (``TransportError``, ``OperationCancelledError``), which point at
connectivity or the repository server.
"""

from __future__ import annotations


class IcwError(Exception):
    """Base exception for all ICW errors."""


class ConfigSyntaxError(IcwError):
    """Raised when a descriptor line cannot be parsed.

    Attributes:
        source: Descriptor the line came from (file path or component name).
        line_number: 1-based line number of the offending line.
        line: The raw line text.
    """

    def __init__(self, source: str, line_number: int, line: str) -> None:
        self.source = source
        self.line_number = line_number
        self.line = line
        super().__init__(
            f"{source}:{line_number}: invalid component syntax: {line.strip()}"
        )


class BranchConflictError(IcwError):
    """Raised when two declarations request different revisions of a component.

    The registry entry that was stored first is left untouched; the error
    names both revisions and both sets of declaring sources so the user can
    find the descriptors that disagree.

    Attributes:
        name: Component identity.
        existing_revision: Revision of the entry already registered.
        new_revision: Revision requested by the rejected declaration.
        existing_sources: Declarers of the registered entry.
        new_sources: Declarers of the rejected declaration.
    """

    def __init__(
        self,
        name: str,
        existing_revision: str,
        new_revision: str,
        existing_sources: tuple[str, ...] = (),
        new_sources: tuple[str, ...] = (),
    ) -> None:
        self.name = name
        self.existing_revision = existing_revision
        self.new_revision = new_revision
        self.existing_sources = tuple(existing_sources)
        self.new_sources = tuple(new_sources)
        super().__init__(
            f"branch mismatch for {name}: {existing_revision} "
            f"(declared by {', '.join(self.existing_sources) or 'unknown'}) vs "
            f"{new_revision} (declared by {', '.join(self.new_sources) or 'unknown'})"
        )


class TransportError(IcwError):
    """Raised when the repository cannot be read.

    Covers authentication failures, unreachable servers, permission problems,
    and a missing version-control client. A descriptor that simply does not
    exist is not a transport error.
    """


class OperationCancelledError(IcwError):
    """Raised when a graph build is cancelled or runs past its deadline."""


class ConfigurationError(IcwError):
    """Raised when workspace settings cannot be resolved.

    Covers a missing repository name and an unusable workspace location.
    """


class WorkspaceNotFoundError(ConfigurationError):
    """Raised when no workspace.config exists in a directory or its parents."""


class WorkspaceExistsError(ConfigurationError):
    """Raised when creating a workspace.config where one already exists."""


class DescriptorReadError(ConfigurationError):
    """Raised when a local descriptor file cannot be read or decoded.

    Attributes:
        source: Path of the descriptor.
        reason: Underlying read or decode failure.
    """

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        self.reason = reason
        super().__init__(f"cannot read {source}: {reason}")
