"""Component model: categories, version-control kinds, and the Component node.

A component is a named design unit stored under version control, e.g.
``digital/spi_master``. Its category decides which version-control system
holds it: software tools live in Git, every circuit category lives in
Subversion. Local references (``use ref(...)``) point at directories outside
the repository and are never fetched.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable

# Declarer recorded on components that come from the root descriptor.
ROOT_DECLARER = "workspace.config"

# Revision selector for local references.
LOCAL_REVISION = "local"

# Revision used when a declaration does not name one.
DEFAULT_REVISION = "trunk"


# ---------------------------------------------------------------------------
# Category and VcsKind
# ---------------------------------------------------------------------------


class Category(str, Enum):
    """Kind of design unit a component holds."""

    ANALOG = "analog"
    DIGITAL = "digital"
    SETUP = "setup"
    PROCESS = "process"
    TOOLS = "tools"

    @classmethod
    def from_name(cls, text: str) -> Category | None:
        """Look up a category by its declared name, ignoring case.

        Returns:
            The matching ``Category``, or None for an unknown name.
        """
        try:
            return cls(text.strip().lower())
        except ValueError:
            return None


class VcsKind(str, Enum):
    """Version-control system a component resides in."""

    SVN = "svn"
    GIT = "git"
    LOCAL = "local"


# Path prefixes checked in order by ``infer_category``.
_PREFIX_CATEGORIES: tuple[tuple[str, Category], ...] = (
    ("analog/", Category.ANALOG),
    ("digital/", Category.DIGITAL),
    ("setup/", Category.SETUP),
    ("process/", Category.PROCESS),
    ("process_setup/", Category.PROCESS),
    ("tools/", Category.TOOLS),
    ("software/", Category.TOOLS),
)

_CATEGORY_VCS: dict[Category, VcsKind] = {
    Category.ANALOG: VcsKind.SVN,
    Category.DIGITAL: VcsKind.SVN,
    Category.SETUP: VcsKind.SVN,
    Category.PROCESS: VcsKind.SVN,
    Category.TOOLS: VcsKind.GIT,
}


def infer_category(path: str) -> Category:
    """Infer a component category from its path prefix.

    Unknown prefixes default to ``Category.DIGITAL``.
    """
    for prefix, category in _PREFIX_CATEGORIES:
        if path.startswith(prefix):
            return category
    return Category.DIGITAL


def infer_vcs(category: Category) -> VcsKind:
    """Return the version-control system that stores a category."""
    return _CATEGORY_VCS[category]


# ---------------------------------------------------------------------------
# Component
# ---------------------------------------------------------------------------


@dataclass(eq=False)
class Component:
    """A named, versioned unit of the workspace.

    Identity is the ``name``; the registry keeps exactly one authoritative
    instance per name. Equality is object identity so that instances can be
    compared without walking their (possibly cyclic) dependency lists.

    Attributes:
        name: Path-like identity, unique within the workspace
            (e.g. "digital/spi_master").
        path: Location under the workspace root. Equal to ``name`` for
            repository components; may be absolute for local references.
        category: Kind of design unit.
        revision: Opaque revision selector ("trunk", "tags/v1.0",
            "branches/x", a Git branch, or "local").
        vcs: Version-control system holding the component.
        declared_by: Declaring sources in first-seen order, without
            duplicates. Diagnostic only; not part of identity.
        dependencies: Authoritative child components, in declaration order.
        resolved: Reserved marker; not consumed by any algorithm.
    """

    name: str
    path: str
    category: Category
    revision: str
    vcs: VcsKind
    declared_by: list[str] = field(default_factory=list)
    dependencies: list[Component] = field(default_factory=list)
    resolved: bool = False

    @property
    def is_local(self) -> bool:
        """True for local references, which are never fetched or expanded."""
        return self.vcs is VcsKind.LOCAL

    def merge_declared_by(self, sources: Iterable[str]) -> None:
        """Append declaring sources not already recorded, keeping order."""
        for source in sources:
            if source not in self.declared_by:
                self.declared_by.append(source)

    def has_dependency(self, name: str) -> bool:
        """Return True if a child with this identity is already attached."""
        return any(dep.name == name for dep in self.dependencies)

    def __repr__(self) -> str:
        return (
            f"Component(name={self.name!r}, revision={self.revision!r}, "
            f"category={self.category.value!r}, vcs={self.vcs.value!r})"
        )
