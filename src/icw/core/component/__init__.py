"""Component model and workspace registry.

Public names are re-exported here so that callers can write
``from icw.core.component import Component, Workspace``.
"""

from icw.core.component.models import (
    DEFAULT_REVISION,
    LOCAL_REVISION,
    ROOT_DECLARER,
    Category,
    Component,
    VcsKind,
    infer_category,
    infer_vcs,
)
from icw.core.component.workspace import WORKSPACE_CONFIG, Workspace

__all__ = [
    "DEFAULT_REVISION",
    "LOCAL_REVISION",
    "ROOT_DECLARER",
    "WORKSPACE_CONFIG",
    "Category",
    "Component",
    "VcsKind",
    "Workspace",
    "infer_category",
    "infer_vcs",
]
