"""Tests for breadth-first dependency graph expansion.

Covers the end-to-end scenarios: a root with two dependencies, conflicting
revisions from sibling components, cyclic descriptors, local references, and
descriptors read from local checkouts instead of the repository.
"""

from __future__ import annotations

import pathlib

import pytest

from icw.core.component import VcsKind
from icw.core.dependency import DependencyExpander, build_graph
from icw.exceptions import (
    BranchConflictError,
    ConfigSyntaxError,
    DescriptorReadError,
    TransportError,
)

ROOT = 'use component("digital/top", "digital", "trunk")\n'
TOP_DEPS = (
    'use component("digital/spi", "digital", "trunk")\n'
    'use component("analog/bias", "analog", "tags/v1.0")\n'
)


class TestBasicExpansion:
    def test_root_with_two_dependencies(self, make_workspace, fake_source) -> None:
        workspace = make_workspace(ROOT)
        source = fake_source({("digital/top", "trunk"): TOP_DEPS})
        build_graph(workspace, {VcsKind.SVN: source})

        assert set(workspace.components) == {"digital/top", "digital/spi", "analog/bias"}
        top = workspace.get_component("digital/top")
        assert [d.name for d in top.dependencies] == ["digital/spi", "analog/bias"]

    def test_dependencies_are_authoritative_instances(self, make_workspace, fake_source) -> None:
        workspace = make_workspace(ROOT)
        source = fake_source({("digital/top", "trunk"): TOP_DEPS})
        build_graph(workspace, {VcsKind.SVN: source})
        top = workspace.get_component("digital/top")
        for dep in top.dependencies:
            assert workspace.get_component(dep.name) is dep

    def test_declared_by_parent(self, make_workspace, fake_source) -> None:
        workspace = make_workspace(ROOT)
        build_graph(workspace, {VcsKind.SVN: fake_source({("digital/top", "trunk"): TOP_DEPS})})
        assert workspace.get_component("analog/bias").declared_by == ["digital/top"]

    def test_fetch_uses_component_revision(self, make_workspace, fake_source) -> None:
        workspace = make_workspace('use component("digital/top", "digital", "tags/v3.1")\n')
        source = fake_source()
        build_graph(workspace, {VcsKind.SVN: source})
        assert source.fetches == [("digital/top", "tags/v3.1", "depend.config")]

    def test_transitive_expansion(self, make_workspace, fake_source) -> None:
        workspace = make_workspace(ROOT)
        source = fake_source({
            ("digital/top", "trunk"): 'use component("digital/spi")\n',
            ("digital/spi", "trunk"): 'use component("digital/fifo")\n',
            ("digital/fifo", "trunk"): 'use component("analog/ldo")\n',
        })
        build_graph(workspace, {VcsKind.SVN: source})
        assert len(workspace) == 4
        assert workspace.get_component("digital/fifo").dependencies[0].name == "analog/ldo"

    def test_missing_descriptor_means_no_dependencies(self, make_workspace, fake_source) -> None:
        workspace = make_workspace(ROOT)
        build_graph(workspace, {VcsKind.SVN: fake_source()})
        assert len(workspace) == 1
        assert workspace.get_component("digital/top").dependencies == []

    def test_empty_workspace(self, make_workspace, fake_source) -> None:
        workspace = make_workspace("# nothing yet\n")
        source = fake_source()
        build_graph(workspace, {VcsKind.SVN: source})
        assert len(workspace) == 0
        assert source.fetches == []


class TestConflicts:
    def test_sibling_conflict_names_both_sources(self, make_workspace, fake_source) -> None:
        workspace = make_workspace(ROOT + 'use component("digital/sib", "digital", "trunk")\n')
        source = fake_source({
            ("digital/top", "trunk"): 'use component("analog/bias", "analog", "tags/v1.0")\n',
            ("digital/sib", "trunk"): 'use component("analog/bias", "analog", "tags/v2.0")\n',
        })
        with pytest.raises(BranchConflictError) as excinfo:
            build_graph(workspace, {VcsKind.SVN: source})
        err = excinfo.value
        assert err.name == "analog/bias"
        assert {err.existing_revision, err.new_revision} == {"tags/v1.0", "tags/v2.0"}
        assert err.existing_sources == ("digital/top",)
        assert err.new_sources == ("digital/sib",)

    def test_conflict_with_root_declaration(self, make_workspace, fake_source) -> None:
        workspace = make_workspace(ROOT + 'use component("analog/bias", "analog", "trunk")\n')
        source = fake_source({
            ("digital/top", "trunk"): 'use component("analog/bias", "analog", "tags/v1.0")\n',
        })
        with pytest.raises(BranchConflictError) as excinfo:
            build_graph(workspace, {VcsKind.SVN: source})
        assert excinfo.value.existing_sources == ("workspace.config",)
        assert workspace.get_component("analog/bias").revision == "trunk"

    def test_conflict_aborts_before_further_fetches(self, make_workspace, fake_source) -> None:
        workspace = make_workspace(
            ROOT
            + 'use component("digital/sib")\n'
            + 'use component("digital/late")\n'
        )
        source = fake_source({
            ("digital/top", "trunk"): 'use component("analog/bias", "analog", "tags/v1.0")\n',
            ("digital/sib", "trunk"): 'use component("analog/bias", "analog", "tags/v2.0")\n',
        })
        with pytest.raises(BranchConflictError):
            build_graph(workspace, {VcsKind.SVN: source})
        assert ("digital/late", "trunk", "depend.config") not in source.fetches

    def test_same_revision_from_siblings_merges(self, make_workspace, fake_source) -> None:
        workspace = make_workspace(ROOT + 'use component("digital/sib")\n')
        shared = 'use component("analog/bias", "analog", "tags/v1.0")\n'
        source = fake_source({
            ("digital/top", "trunk"): shared,
            ("digital/sib", "trunk"): shared,
        })
        build_graph(workspace, {VcsKind.SVN: source})
        bias = workspace.get_component("analog/bias")
        assert bias.declared_by == ["digital/top", "digital/sib"]
        assert workspace.get_component("digital/sib").dependencies == [bias]
        # Expanded once even though declared twice.
        assert [f for f in source.fetches if f[0] == "analog/bias"] == [
            ("analog/bias", "tags/v1.0", "depend.config")
        ]


class TestCycles:
    def test_two_component_cycle_terminates(self, make_workspace, fake_source) -> None:
        workspace = make_workspace('use component("digital/a")\n')
        source = fake_source({
            ("digital/a", "trunk"): 'use component("digital/b")\n',
            ("digital/b", "trunk"): 'use component("digital/a")\n',
        })
        build_graph(workspace, {VcsKind.SVN: source})
        a = workspace.get_component("digital/a")
        b = workspace.get_component("digital/b")
        assert a.dependencies == [b]
        assert b.dependencies == [a]
        assert len(source.fetches) == 2

    def test_self_dependency_terminates(self, make_workspace, fake_source) -> None:
        workspace = make_workspace('use component("digital/a")\n')
        source = fake_source({("digital/a", "trunk"): 'use component("digital/a")\n'})
        build_graph(workspace, {VcsKind.SVN: source})
        assert len(source.fetches) == 1


class TestLocalReferences:
    def test_ref_never_fetched(self, make_workspace, fake_source) -> None:
        workspace = make_workspace('use ref("/abs/path/x")\n')
        source = fake_source()
        build_graph(workspace, {VcsKind.SVN: source})
        assert source.fetches == []
        assert workspace.get_component("/abs/path/x").vcs is VcsKind.LOCAL

    def test_ref_declared_in_descriptor_not_expanded(
        self, make_workspace, fake_source, tmp_path: pathlib.Path
    ) -> None:
        local = tmp_path / "local_ip"
        local.mkdir()
        (local / "depend.config").write_text('use component("analog/never")\n')
        workspace = make_workspace(ROOT)
        source = fake_source({("digital/top", "trunk"): f'use ref("{local}")\n'})
        build_graph(workspace, {VcsKind.SVN: source})
        assert "analog/never" not in workspace
        assert [f[0] for f in source.fetches] == ["digital/top"]


class TestLocalCheckouts:
    def test_checked_out_component_read_from_disk(
        self, make_workspace, fake_source, workspace_dir: pathlib.Path
    ) -> None:
        top_dir = workspace_dir / "digital" / "top"
        top_dir.mkdir(parents=True)
        (top_dir / "depend.config").write_text('use component("analog/bias")\n')
        workspace = make_workspace(ROOT)
        source = fake_source(
            {("digital/top", "trunk"): 'use component("analog/remote")\n'},
            checked_out={workspace.root / "digital" / "top"},
        )
        build_graph(workspace, {VcsKind.SVN: source})
        assert "analog/bias" in workspace
        assert "analog/remote" not in workspace
        assert ("digital/top", "trunk", "depend.config") not in source.fetches

    def test_checked_out_without_descriptor(
        self, make_workspace, fake_source, workspace_dir: pathlib.Path
    ) -> None:
        (workspace_dir / "digital" / "top").mkdir(parents=True)
        workspace = make_workspace(ROOT)
        source = fake_source(
            {("digital/top", "trunk"): 'use component("analog/remote")\n'},
            checked_out={workspace.root / "digital" / "top"},
        )
        build_graph(workspace, {VcsKind.SVN: source})
        assert len(workspace) == 1
        assert source.fetches == []

    def test_local_descriptor_without_working_copy(
        self, make_workspace, fake_source, workspace_dir: pathlib.Path
    ) -> None:
        top_dir = workspace_dir / "digital" / "top"
        top_dir.mkdir(parents=True)
        (top_dir / "depend.config").write_text('use component("analog/bias")\n')
        workspace = make_workspace(ROOT)
        source = fake_source({("digital/top", "trunk"): 'use component("analog/remote")\n'})
        build_graph(workspace, {VcsKind.SVN: source})
        assert "analog/bias" in workspace
        assert "analog/remote" not in workspace
        assert source.fetches == [("analog/bias", "trunk", "depend.config")]

    def test_directory_without_descriptor_is_fetched(
        self, make_workspace, fake_source, workspace_dir: pathlib.Path
    ) -> None:
        (workspace_dir / "digital" / "top").mkdir(parents=True)
        workspace = make_workspace(ROOT)
        source = fake_source({("digital/top", "trunk"): 'use component("analog/remote")\n'})
        build_graph(workspace, {VcsKind.SVN: source})
        assert "analog/remote" in workspace

    def test_kind_without_reader_uses_local_directory(
        self, make_workspace, workspace_dir: pathlib.Path
    ) -> None:
        tools_dir = workspace_dir / "tools" / "flow"
        tools_dir.mkdir(parents=True)
        (tools_dir / "depend.config").write_text('use component("tools/lib", "tools", "main")\n')
        workspace = make_workspace('use component("tools/flow", "tools", "main")\n')
        build_graph(workspace, {})
        assert workspace.get_component("tools/flow").dependencies[0].name == "tools/lib"

    def test_kind_without_reader_not_checked_out(self, make_workspace) -> None:
        workspace = make_workspace('use component("tools/flow", "tools", "main")\n')
        build_graph(workspace, {})
        assert len(workspace) == 1


class TestFailures:
    def test_syntax_error_in_descriptor(self, make_workspace, fake_source) -> None:
        workspace = make_workspace(ROOT)
        source = fake_source({
            ("digital/top", "trunk"): 'use component("digital/spi")\nuse component(oops\n',
        })
        with pytest.raises(ConfigSyntaxError) as excinfo:
            build_graph(workspace, {VcsKind.SVN: source})
        assert excinfo.value.line_number == 2
        assert "digital/top" in excinfo.value.source

    def test_syntax_error_registers_nothing_from_descriptor(
        self, make_workspace, fake_source
    ) -> None:
        workspace = make_workspace(ROOT)
        source = fake_source({
            ("digital/top", "trunk"): 'use component("digital/spi")\nuse component(oops\n',
        })
        with pytest.raises(ConfigSyntaxError):
            build_graph(workspace, {VcsKind.SVN: source})
        assert "digital/spi" not in workspace
        assert workspace.get_component("digital/top").dependencies == []

    def test_undecodable_local_descriptor(
        self, make_workspace, fake_source, workspace_dir: pathlib.Path
    ) -> None:
        top_dir = workspace_dir / "digital" / "top"
        top_dir.mkdir(parents=True)
        (top_dir / "depend.config").write_bytes(b'use component("analog/\xff")\n')
        workspace = make_workspace(ROOT)
        with pytest.raises(DescriptorReadError) as excinfo:
            build_graph(workspace, {VcsKind.SVN: fake_source()})
        assert excinfo.value.source.endswith("depend.config")
        assert len(workspace) == 1

    def test_transport_error_propagates(self, make_workspace, fake_source) -> None:
        workspace = make_workspace(ROOT)
        source = fake_source(errors={"digital/top": TransportError("authorization failed")})
        with pytest.raises(TransportError, match="authorization failed"):
            build_graph(workspace, {VcsKind.SVN: source})


class TestExpanderBehaviour:
    def test_set_directives_in_descriptor_ignored(self, make_workspace, fake_source) -> None:
        workspace = make_workspace(ROOT)
        source = fake_source({
            ("digital/top", "trunk"): 'set repo "other"\nuse component("analog/bias")\n',
        })
        build_graph(workspace, {VcsKind.SVN: source})
        assert len(workspace) == 2

    def test_duplicate_child_attached_once(self, make_workspace, fake_source) -> None:
        workspace = make_workspace(ROOT)
        source = fake_source({
            ("digital/top", "trunk"): 'use component("analog/bias")\nuse component("analog/bias")\n',
        })
        build_graph(workspace, {VcsKind.SVN: source})
        assert len(workspace.get_component("digital/top").dependencies) == 1

    def test_expander_is_single_use(self, make_workspace, fake_source) -> None:
        workspace = make_workspace(ROOT)
        expander = DependencyExpander(workspace, {VcsKind.SVN: fake_source()})
        expander.expand()
        with pytest.raises(RuntimeError):
            expander.expand()

    def test_no_timeout_passes_none(self, make_workspace, fake_source) -> None:
        workspace = make_workspace(ROOT)
        source = fake_source()
        build_graph(workspace, {VcsKind.SVN: source})
        assert source.timeouts == [None]
