"""Unit tests for the command-line interface."""

import pytest
from typer.testing import CliRunner

from apkforge import __version__, cli

runner = CliRunner()


@pytest.fixture(autouse=True)
def quiet_cli(monkeypatch, config):
    """Keep CLI runs from reconfiguring logging and from reading the environment."""
    monkeypatch.setattr(cli, "setup_logging", lambda config: None)
    monkeypatch.setattr(cli, "get_config", lambda: config)


class TestCli:
    """Tests for the apkforge commands."""

    def test_version(self):
        """Test the eager --version option."""
        result = runner.invoke(cli.app, ["--version"])

        assert result.exit_code == 0
        assert f"APKForge v{__version__}" in result.stdout

    def test_analyze_json(self, generic_project):
        """Test JSON output of the analyze command."""
        result = runner.invoke(cli.app, ["analyze", str(generic_project), "--json"])

        assert result.exit_code == 0
        assert '"framework": "generic-mobile"' in result.stdout

    def test_analyze_rejects_missing_path(self, temp_dir):
        """Test that a non-existent project path is a usage error."""
        result = runner.invoke(cli.app, ["analyze", str(temp_dir / "missing")])

        assert result.exit_code != 0

    def test_build_success(self, generic_project):
        """Test a successful build from the command line."""
        result = runner.invoke(cli.app, ["build", str(generic_project)])

        assert result.exit_code == 0
        assert "Build completed successfully" in result.stdout
        assert (generic_project / "build/outputs/apk/release/app-release.apk").is_file()

    def test_build_failure_exit_code(self, temp_dir, make_tree):
        """Test that a failed build exits with status 1."""
        root = make_tree(temp_dir / "rn", {"package.json": "{}", "metro.config.js": ""})

        result = runner.invoke(cli.app, ["build", str(root)])

        assert result.exit_code == 1
        assert "Build failed" in result.stdout

    def test_config(self):
        """Test the configuration table."""
        result = runner.invoke(cli.app, ["config"])

        assert result.exit_code == 0
        assert "APKFORGE_LOG_LEVEL" in result.stdout
