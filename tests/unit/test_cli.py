"""Unit tests for CLI interface."""

import json

import typer
import yaml
from typer.testing import CliRunner

from varorder.cli import app


class TestCLI:
    """Test CLI interface."""

    def setup_method(self):
        """Set up test fixtures."""
        self.runner = CliRunner()

    def invoke(self, args):
        """Run the app with info logs silenced so stdout holds command output only."""
        return self.runner.invoke(app, args, env={"LOG_LEVEL": "WARNING"})

    def test_cli_app_structure(self):
        """Test CLI app structure."""
        assert isinstance(app, typer.Typer)
        assert callable(app)

    def test_check_success(self, dashboard_file):
        """Test check on a valid dashboard."""
        result = self.invoke(["check", str(dashboard_file)])

        assert result.exit_code == 0
        assert "PASS" in result.stdout
        assert "7 variable(s) in 4 group(s)" in result.stdout

    def test_check_cycle(self, cyclic_dashboard_file):
        """Test check on a dashboard with a circular dependency."""
        result = self.invoke(["check", str(cyclic_dashboard_file)])

        assert result.exit_code == 1
        assert "circular dependency detected" in result.stdout

    def test_check_undefined_reference(self, tmp_path):
        """Test check on a dashboard referencing an unknown variable."""
        path = tmp_path / "dash.yaml"
        path.write_text(
            yaml.safe_dump({"a": {"kind": "QueryVariable", "parameter": {"expr": "up{x='$z'}"}}})
        )

        result = self.invoke(["check", str(path)])

        assert result.exit_code == 1
        assert "variable 'z' is used" in result.stdout

    def test_check_invalid_name_shows_pattern(self, tmp_path):
        """The pattern's brackets are printed literally."""
        path = tmp_path / "dash.yaml"
        path.write_text(yaml.safe_dump({"bad.name": {"kind": "TextVariable"}}))

        result = self.invoke(["check", str(path)])

        assert result.exit_code == 1
        assert "[a-zA-Z0-9_-]" in result.stdout

    def test_check_all_errors(self, tmp_path):
        """Test --all-errors reports every problem."""
        path = tmp_path / "dash.yaml"
        path.write_text(
            yaml.safe_dump(
                {
                    "a": {"kind": "QueryVariable", "parameter": {"expr": "$y"}},
                    "b": {"kind": "QueryVariable", "parameter": {"expr": "$z"}},
                }
            )
        )

        result = self.invoke(["check", str(path), "--all-errors"])

        assert result.exit_code == 1
        assert "2 variable error(s) found" in result.stdout

    def test_check_invalid_file(self, tmp_path):
        """Test check on a malformed dashboard."""
        path = tmp_path / "dash.yaml"
        path.write_text("variables: [oops\n")

        result = self.invoke(["check", str(path)])

        assert result.exit_code == 1
        assert "Invalid YAML" in result.stdout

    def test_check_file_not_found(self, tmp_path):
        """Test that a missing file is rejected by argument validation."""
        result = self.invoke(["check", str(tmp_path / "missing.yaml")])

        assert result.exit_code != 0

    def test_check_with_config(self, tmp_path, dashboard_file):
        """Test that --config is applied."""
        config = tmp_path / "config.yaml"
        config.write_text(yaml.safe_dump({"resolver": {"name_pattern": "^[a-c]$"}}))

        result = self.invoke(["check", str(dashboard_file), "--config", str(config)])

        assert result.exit_code == 1
        assert "not a correct variable name" in result.stdout

    def test_check_config_unknown_key(self, tmp_path, dashboard_file):
        """A misspelled config setting is reported, not raised."""
        config = tmp_path / "config.yaml"
        config.write_text(yaml.safe_dump({"resolver": {"name_patern": "x"}}))

        result = self.invoke(["check", str(dashboard_file), "--config", str(config)])

        assert result.exit_code == 1
        assert result.exception is None or isinstance(result.exception, SystemExit)
        assert "Invalid resolver settings" in result.stdout
        assert "name_patern" in result.stdout

    def test_config_logging_section_is_applied(self, tmp_path, dashboard_file):
        """The logging section of --config decides where logs go."""
        log_file = tmp_path / "logs" / "varorder.log"
        config = tmp_path / "config.yaml"
        config.write_text(
            yaml.safe_dump({"logging": {"level": "INFO", "format": "json", "file": str(log_file)}})
        )

        result = self.invoke(["check", str(dashboard_file), "--config", str(config)])

        assert result.exit_code == 0
        assert log_file.exists()
        assert "Dashboard variables checked" in log_file.read_text()

    def test_order_json(self, dashboard_file):
        """Test order --json output."""
        result = self.invoke(["order", str(dashboard_file), "--json"])

        assert result.exit_code == 0
        assert json.loads(result.stdout) == [["d", "f"], ["b", "c", "g"], ["a"], ["e"]]

    def test_order_table(self, dashboard_file):
        """Test order table output."""
        result = self.invoke(["order", str(dashboard_file)])

        assert result.exit_code == 0
        assert "Variable Build Order" in result.stdout
        assert "b, c, g" in result.stdout

    def test_order_cycle(self, cyclic_dashboard_file):
        """Test that order fails on a cycle."""
        result = self.invoke(["order", str(cyclic_dashboard_file), "--json"])

        assert result.exit_code == 1
        assert "circular dependency detected" in result.stdout

    def test_graph(self, dashboard_file):
        """Test DOT output."""
        result = self.invoke(["graph", str(dashboard_file)])

        assert result.exit_code == 0
        assert result.stdout.startswith("digraph VariableGraph {")
        assert '"a" -> "e";' in result.stdout

    def test_graph_with_cycle(self, cyclic_dashboard_file):
        """A cyclic graph can still be drawn."""
        result = self.invoke(["graph", str(cyclic_dashboard_file)])

        assert result.exit_code == 0
        assert '"a" -> "b";' in result.stdout
        assert '"b" -> "a";' in result.stdout

    def test_log_level_option(self, dashboard_file):
        """Global logging options are accepted."""
        result = self.invoke(
            ["--log-level", "ERROR", "--json-logs", "order", str(dashboard_file), "--json"]
        )

        assert result.exit_code == 0
