"""Shared fixtures for CLI tests.

Provides a Click runner, a workspace directory the runner works inside, and
an in-memory repository that stands in for ``svn cat``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest
from click.testing import CliRunner

from icw.core.component import Component
from icw.vcs import SvnClient


class FakeRepository:
    """Descriptor texts keyed by (component name, revision)."""

    def __init__(self) -> None:
        self.descriptors: dict[tuple[str, str], str] = {}
        self.error: Exception | None = None
        self.fetched: list[str] = []

    def add(self, name: str, text: str, revision: str = "trunk") -> None:
        self.descriptors[(name, revision)] = text


@pytest.fixture
def runner() -> CliRunner:
    """Create a Click CliRunner for invoking commands."""
    return CliRunner()


@pytest.fixture
def cli_workspace(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Callable[[str], Path]:
    """Create workspace.config with the given text and chdir into it.

    ``ICW_REPO`` and ``USER`` are set and stored credentials are ignored.
    """
    root = tmp_path / "ws"
    root.mkdir()
    monkeypatch.chdir(root)
    monkeypatch.setenv("ICW_REPO", "chip")
    monkeypatch.setenv("USER", "tester")
    monkeypatch.delenv("ICW_SVN_URL", raising=False)
    monkeypatch.setattr("icw.vcs.svn.get_password", lambda: "")

    def _make(text: str) -> Path:
        (root / "workspace.config").write_text(text)
        return root

    return _make


@pytest.fixture
def fake_repo(monkeypatch: pytest.MonkeyPatch) -> FakeRepository:
    """Replace ``SvnClient.fetch_descriptor_text`` with an in-memory lookup."""
    repo = FakeRepository()

    def fetch(self: SvnClient, component: Component, filename: str, *, timeout=None):
        repo.fetched.append(component.name)
        if repo.error is not None:
            raise repo.error
        return repo.descriptors.get((component.name, component.revision))

    monkeypatch.setattr(SvnClient, "fetch_descriptor_text", fetch)
    return repo
