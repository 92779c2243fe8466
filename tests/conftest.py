"""Shared fixtures for icw tests."""

from __future__ import annotations

import pathlib
from typing import Callable

import pytest

from icw.core.component import Component, Workspace
from icw.core.config import load_workspace
from icw.vcs.base import DescriptorSource


class FakeDescriptorSource(DescriptorSource):
    """In-memory repository keyed by (component name, revision).

    Records every fetch so tests can assert which descriptors were read.
    """

    def __init__(
        self,
        descriptors: dict[tuple[str, str], str] | None = None,
        checked_out: set[pathlib.Path] | None = None,
        errors: dict[str, Exception] | None = None,
    ) -> None:
        self.descriptors = dict(descriptors or {})
        self.checked_out = set(checked_out or ())
        self.errors = dict(errors or {})
        self.fetches: list[tuple[str, str, str]] = []
        self.timeouts: list[float | None] = []

    def fetch_descriptor_text(
        self,
        component: Component,
        filename: str,
        *,
        timeout: float | None = None,
    ) -> str | None:
        self.fetches.append((component.name, component.revision, filename))
        self.timeouts.append(timeout)
        if component.name in self.errors:
            raise self.errors[component.name]
        return self.descriptors.get((component.name, component.revision))

    def is_checked_out_locally(self, path: pathlib.Path) -> bool:
        return path in self.checked_out


@pytest.fixture
def fake_source() -> Callable[..., FakeDescriptorSource]:
    """Factory for ``FakeDescriptorSource`` instances."""
    return FakeDescriptorSource


@pytest.fixture
def workspace_dir(tmp_path: pathlib.Path) -> pathlib.Path:
    """Create an empty workspace directory."""
    root = tmp_path / "ws"
    root.mkdir()
    return root


@pytest.fixture
def make_workspace(workspace_dir: pathlib.Path) -> Callable[[str], Workspace]:
    """Write workspace.config with the given text and load it."""

    def _make(text: str) -> Workspace:
        (workspace_dir / "workspace.config").write_text(text)
        workspace, _ = load_workspace(workspace_dir)
        return workspace

    return _make
