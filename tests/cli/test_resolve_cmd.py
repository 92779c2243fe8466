"""Tests for the ``icw resolve`` command."""

from __future__ import annotations

import json

import yaml
from click.testing import CliRunner

from icw.cli.main import cli

ROOT = 'use component("digital/top", "digital", "trunk")\n'
TOP_DEPS = (
    'use component("digital/spi", "digital", "trunk")\n'
    'use component("analog/bias", "analog", "tags/v1.0")\n'
)


class TestResolveCommand:
    def test_table(self, runner: CliRunner, cli_workspace, fake_repo) -> None:
        cli_workspace(ROOT)
        fake_repo.add("digital/top", TOP_DEPS)
        result = runner.invoke(cli, ["resolve"])
        assert result.exit_code == 0, result.output
        assert "Resolution successful" in result.output
        assert "3 component(s) resolved" in result.output

    def test_json(self, runner: CliRunner, cli_workspace, fake_repo) -> None:
        cli_workspace(ROOT)
        fake_repo.add("digital/top", TOP_DEPS)
        result = runner.invoke(cli, ["resolve", "--format", "json"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["roots"] == ["digital/top"]
        by_name = {c["name"]: c for c in data["components"]}
        assert [c["name"] for c in data["components"]] == sorted(by_name)
        assert by_name["digital/top"]["dependencies"] == ["digital/spi", "analog/bias"]
        assert by_name["digital/top"]["declared_by"] == ["workspace.config"]
        assert by_name["analog/bias"] == {
            "name": "analog/bias",
            "path": "analog/bias",
            "category": "analog",
            "revision": "tags/v1.0",
            "vcs": "svn",
            "declared_by": ["digital/top"],
            "dependencies": [],
        }

    def test_yaml(self, runner: CliRunner, cli_workspace, fake_repo) -> None:
        cli_workspace(ROOT)
        fake_repo.add("digital/top", TOP_DEPS)
        result = runner.invoke(cli, ["resolve", "--format", "yaml"])
        assert result.exit_code == 0, result.output
        data = yaml.safe_load(result.stdout)
        assert len(data["components"]) == 3
        assert data["roots"] == ["digital/top"]

    def test_empty_workspace(self, runner: CliRunner, cli_workspace, fake_repo) -> None:
        cli_workspace("")
        result = runner.invoke(cli, ["resolve"])
        assert result.exit_code == 0
        assert "No components defined" in result.output

    def test_local_reference_listed(self, runner: CliRunner, cli_workspace, fake_repo) -> None:
        cli_workspace('use ref("/opt/ip/pll")\n')
        result = runner.invoke(cli, ["resolve", "--format", "json"])
        assert result.exit_code == 0, result.output
        (component,) = json.loads(result.stdout)["components"]
        assert component["vcs"] == "local"
        assert component["revision"] == "local"
        assert fake_repo.fetched == []
