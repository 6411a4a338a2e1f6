"""Tests for the command line interface."""

import json
import os

import yaml
from click.testing import CliRunner

from route_discover import __version__
from route_discover.cli import main

FIXTURES = os.path.join(os.path.dirname(__file__), "fixtures", "sample_app")
LAMBDA_DIR = os.path.join(FIXTURES, "src", "lambda")


def _write_conflict(root):
    for name in ("one", "two"):
        (root / f"{name}.ts").write_text(
            " * @route GET /same\nexport const h = async () => {};\n")


class TestCli:
    def test_generates_json(self, tmp_path):
        output = tmp_path / "out" / "routes.json"
        result = CliRunner().invoke(main, [LAMBDA_DIR, "-o", str(output)])
        assert result.exit_code == 0, result.output
        data = json.loads(output.read_text())
        assert len(data["functions"]) == 4
        assert len(data["routes"]) == 5
        assert "Summary" in result.output

    def test_generates_yaml(self, tmp_path):
        output = tmp_path / "routes.yaml"
        result = CliRunner().invoke(
            main, [LAMBDA_DIR, "-o", str(output), "--format", "yaml", "-q"])
        assert result.exit_code == 0, result.output
        assert len(yaml.safe_load(output.read_text())["routes"]) == 5
        assert "Summary" not in result.output

    def test_output_from_env(self, tmp_path):
        output = tmp_path / "env-routes.json"
        result = CliRunner().invoke(main, [LAMBDA_DIR, "-q"],
                                    env={"ROUTES_OUTPUT": str(output)})
        assert result.exit_code == 0, result.output
        assert output.exists()

    def test_missing_root_writes_empty_config(self, tmp_path):
        output = tmp_path / "routes.json"
        result = CliRunner().invoke(
            main, [str(tmp_path / "missing"), "-o", str(output)])
        assert result.exit_code == 0, result.output
        assert json.loads(output.read_text())["functions"] == []
        assert "No routes discovered" in result.output

    def test_strict_conflict_fails(self, tmp_path):
        _write_conflict(tmp_path)
        output = tmp_path / "out" / "routes.json"
        result = CliRunner().invoke(
            main, [str(tmp_path), "-o", str(output), "--strict"])
        assert result.exit_code == 1
        assert "Duplicate route GET /same" in result.output
        assert not output.exists()

    def test_strict_conflict_fallback(self, tmp_path):
        _write_conflict(tmp_path)
        output = tmp_path / "out" / "routes.json"
        result = CliRunner().invoke(
            main, [str(tmp_path), "-o", str(output), "--strict",
                   "--fallback-on-error"])
        assert result.exit_code == 0, result.output
        data = json.loads(output.read_text())
        assert data["functions"] == []
        assert "note" in data

    def test_write_failure_exits_nonzero(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        result = CliRunner().invoke(
            main, [LAMBDA_DIR, "-o", str(blocker / "routes.json")])
        assert result.exit_code == 1
        assert "Cannot write" in result.output

    def test_version(self):
        result = CliRunner().invoke(main, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output
