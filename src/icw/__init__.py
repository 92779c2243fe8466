"""ICW: Dependency resolution for multi-component IC design workspaces."""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"
