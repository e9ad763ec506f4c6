"""Tests for docscope.cli module."""

import json
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from docscope.__main__ import cli_args
from docscope.__main__ import main as module_main
from docscope.cli.main import app


@pytest.fixture
def runner():
    """Fixture providing a Typer CLI test runner."""
    return CliRunner()


class TestGlobalOptions:
    """Test the root callback."""

    def test_version(self, runner):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "docscope" in result.output

    def test_invalid_log_level(self, runner, sample_project):
        result = runner.invoke(
            app, ["--root", str(sample_project), "--log-level", "loud", "query", "packages"]
        )
        assert result.exit_code == 1
        assert "log_level" in result.output


class TestQueryCommands:
    """Test the query subcommands."""

    def test_packages_json(self, runner, sample_project):
        result = runner.invoke(app, ["--root", str(sample_project), "--json", "query", "packages"])
        assert result.exit_code == 0
        payload = json.loads(result.output)
        assert [p["import_path"] for p in payload["packages"]] == [
            "sample",
            "sample.geometry",
            "sample.values",
        ]

    def test_packages_with_selector(self, runner, sample_project):
        result = runner.invoke(
            app,
            ["--root", str(sample_project), "--pkg", "sample.values", "--json", "query", "packages"],
        )
        assert result.exit_code == 0
        assert [p["import_path"] for p in json.loads(result.output)["packages"]] == [
            "sample.values"
        ]

    def test_packages_markdown(self, runner, sample_project):
        result = runner.invoke(app, ["--root", str(sample_project), "query", "packages"])
        assert result.exit_code == 0
        assert "sample.geometry" in result.output

    def test_class(self, runner, sample_project):
        result = runner.invoke(
            app, ["--root", str(sample_project), "--json", "query", "class", "sample.geometry", "Point"]
        )
        assert result.exit_code == 0
        assert json.loads(result.output)["name"] == "Point"

    def test_func(self, runner, sample_project):
        result = runner.invoke(
            app,
            ["--root", str(sample_project), "--json", "query", "func", "sample.geometry", "distance"],
        )
        assert result.exit_code == 0
        assert json.loads(result.output)["signature"] == "(a: Point, b: Point) -> float"

    def test_method(self, runner, sample_project):
        result = runner.invoke(
            app,
            [
                "--root",
                str(sample_project),
                "--json",
                "query",
                "method",
                "sample.geometry",
                "Point",
                "norm",
            ],
        )
        assert result.exit_code == 0
        assert json.loads(result.output)["receiver_type"] == "Point"

    def test_values(self, runner, sample_project):
        result = runner.invoke(
            app, ["--root", str(sample_project), "--json", "query", "values", "sample.values"]
        )
        assert result.exit_code == 0
        names = [c["name"] for c in json.loads(result.output)["constants"]]
        assert "MAX_SIZE" in names

    def test_inspect_without_comments(self, runner, sample_project):
        result = runner.invoke(
            app,
            [
                "--root",
                str(sample_project),
                "--json",
                "query",
                "inspect",
                "sample.geometry",
                "--no-comments",
            ],
        )
        assert result.exit_code == 0
        assert json.loads(result.output)["include_comments"] is False

    def test_unknown_package_exits_with_error(self, runner, sample_project):
        result = runner.invoke(
            app, ["--root", str(sample_project), "query", "values", "sample.nope"]
        )
        assert result.exit_code == 1
        assert "Package not found" in result.output

    def test_wrong_kind_exits_with_error(self, runner, sample_project):
        result = runner.invoke(
            app, ["--root", str(sample_project), "query", "func", "sample.geometry", "Point"]
        )
        assert result.exit_code == 1
        assert "Not a function" in result.output

    def test_missing_root_exits_with_error(self, runner, tmp_path):
        result = runner.invoke(app, ["--root", str(tmp_path / "missing"), "query", "packages"])
        assert result.exit_code == 1
        assert "exist" in result.output


class TestServe:
    """Test the serve command."""

    def test_serve_passes_options(self, runner, sample_project):
        pytest.importorskip("mcp", reason="MCP package not installed")
        with patch("docscope.mcp_server.main") as serve_mcp:
            result = runner.invoke(
                app,
                [
                    "--root", str(sample_project),
                    "--pkg", "sample...",
                    "--log-level", "debug",
                    "serve",
                ],
            )
        assert result.exit_code == 0
        serve_mcp.assert_called_once_with(
            root_dir=str(sample_project), selector="sample...", log_level="DEBUG"
        )

    def test_serve_log_level_defaults_to_env(self, runner, sample_project, monkeypatch):
        pytest.importorskip("mcp", reason="MCP package not installed")
        monkeypatch.setenv("DOCSCOPE_LOG_LEVEL", "warning")
        with patch("docscope.mcp_server.main") as serve_mcp:
            result = runner.invoke(app, ["--root", str(sample_project), "serve"])
        assert result.exit_code == 0
        assert serve_mcp.call_args.kwargs["log_level"] == "WARNING"


class TestModuleEntry:
    """Test ``python -m docscope`` argument handling."""

    def test_plain_arguments_pass_through(self):
        assert cli_args(["--root", "src", "query", "packages"]) == [
            "--root",
            "src",
            "query",
            "packages",
        ]

    def test_mcp_flag_becomes_serve(self):
        assert cli_args(["--mcp", "--root", "src"]) == ["--root", "src", "serve"]

    def test_mcp_flag_starts_server(self, sample_project):
        pytest.importorskip("mcp", reason="MCP package not installed")
        with (
            patch("docscope.mcp_server.main") as serve_mcp,
            pytest.raises(SystemExit) as exit_info,
        ):
            module_main(["--root", str(sample_project), "--mcp"])
        assert exit_info.value.code == 0
        assert serve_mcp.call_args.kwargs["root_dir"] == str(sample_project)
