"""Tests for the CLI module."""

from __future__ import annotations

from pathlib import Path

import pytest
from modulemd_yaml import __version__
from modulemd_yaml.cli_main import app
from typer.testing import CliRunner

runner = CliRunner()


@pytest.fixture
def empty_license_file(tmp_path: Path) -> Path:
    """Return a file whose module license set is empty."""
    path = tmp_path / "empty-license.yaml"
    path.write_text(
        """\
document: modulemd
version: 2
data:
  summary: S
  description: D
  license:
    module: []
"""
    )
    return path


class TestVersion:
    """Tests for version option."""

    def test_version_long(self) -> None:
        """Test --version flag."""
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.stdout

    def test_version_short(self) -> None:
        """Test -v flag."""
        result = runner.invoke(app, ["-v"])
        assert result.exit_code == 0
        assert __version__ in result.stdout


class TestNoArgs:
    """Tests for no arguments behavior."""

    def test_no_args_shows_help(self) -> None:
        """Test that no arguments shows help."""
        result = runner.invoke(app)
        assert "validate" in result.output
        assert "dump" in result.output
        assert "info" in result.output


class TestValidateCommand:
    """Tests for the validate command."""

    def test_validate_valid_file(self, testmodule_file: Path) -> None:
        """Test validating a valid file."""
        result = runner.invoke(app, ["validate", str(testmodule_file)])
        assert result.exit_code == 0
        assert "is valid" in result.stdout
        assert "1 document(s)" in result.stdout

    def test_validate_quiet_success(self, testmodule_file: Path) -> None:
        """Test validate with --quiet on valid file produces no output."""
        result = runner.invoke(app, ["validate", "--quiet", str(testmodule_file)])
        assert result.exit_code == 0
        assert "✓" not in result.stdout

    def test_validate_nonexistent_file(self) -> None:
        """Test validating a nonexistent file."""
        result = runner.invoke(app, ["validate", "nonexistent.yaml"])
        assert result.exit_code != 0

    def test_validate_invalid_yaml(self, tmp_path: Path) -> None:
        """Test validating invalid YAML syntax."""
        yaml_file = tmp_path / "invalid.yaml"
        yaml_file.write_text("@not yaml\n")

        result = runner.invoke(app, ["validate", str(yaml_file)])
        assert result.exit_code == 1
        assert "Parse Failed" in result.output

    def test_validate_missing_summary(self, tmp_path: Path, testmodule_yaml: str) -> None:
        """Test validating a document without a summary."""
        yaml_file = tmp_path / "nosummary.yaml"
        yaml_file.write_text(testmodule_yaml.replace("  summary: Test\n", ""))

        result = runner.invoke(app, ["validate", str(yaml_file)])
        assert result.exit_code == 1
        assert "data.summary" in result.output

    def test_validate_warnings_pass(self, empty_license_file: Path) -> None:
        """Warnings alone should not fail validation."""
        result = runner.invoke(app, ["validate", str(empty_license_file)])
        assert result.exit_code == 0
        assert "W001" in result.output
        assert "with warnings" in result.stdout

    def test_validate_strict_fails_on_warnings(self, empty_license_file: Path) -> None:
        """--strict should turn warnings into a failure."""
        result = runner.invoke(app, ["validate", "--strict", str(empty_license_file)])
        assert result.exit_code == 1

    def test_validate_strict_rejects_unknown_keys(
        self, tmp_path: Path, testmodule_yaml: str
    ) -> None:
        """--strict should reject keys outside the schema."""
        yaml_file = tmp_path / "extra.yaml"
        yaml_file.write_text(testmodule_yaml + "  xmd: {}\n")

        assert runner.invoke(app, ["validate", str(yaml_file)]).exit_code == 0
        result = runner.invoke(app, ["validate", "--strict", str(yaml_file)])
        assert result.exit_code == 1
        assert "Unknown key" in result.output

    def test_validate_table_format(self, empty_license_file: Path) -> None:
        """--format table should render issues as a table."""
        result = runner.invoke(app, ["validate", "--format", "table", str(empty_license_file)])
        assert result.exit_code == 0
        assert "Validation Issues" in result.output

    def test_validate_invalid_format(self, testmodule_file: Path) -> None:
        """Unknown output formats should be rejected."""
        result = runner.invoke(app, ["validate", "--format", "xml", str(testmodule_file)])
        assert result.exit_code == 1
        assert "Invalid format" in result.output


class TestDumpCommand:
    """Tests for the dump command."""

    def test_dump_to_stdout(self, tmp_path: Path, testmodule_yaml: str) -> None:
        """Documents should be rewritten in canonical form."""
        yaml_file = tmp_path / "in.yaml"
        yaml_file.write_text(
            """\
version: 2
document: modulemd
data:
  license: {module: [MIT]}
  description: A test module.
  summary: Test
  stream: master
  name: testmodule
"""
        )

        result = runner.invoke(app, ["dump", str(yaml_file)])
        assert result.exit_code == 0
        assert result.stdout == testmodule_yaml

    def test_dump_to_file(self, tmp_path: Path, testmodule_file: Path, testmodule_yaml: str) -> None:
        """-o should write the canonical form to a file."""
        output = tmp_path / "out.yaml"

        result = runner.invoke(app, ["dump", str(testmodule_file), "-o", str(output)])
        assert result.exit_code == 0
        assert "Wrote 1 document(s)" in result.stdout
        assert output.read_text() == testmodule_yaml

    def test_dump_output_exists_no_force(self, tmp_path: Path, testmodule_file: Path) -> None:
        """An existing output file should not be overwritten without --force."""
        output = tmp_path / "out.yaml"
        output.write_text("existing content")

        result = runner.invoke(app, ["dump", str(testmodule_file), "-o", str(output)])
        assert result.exit_code == 1
        assert "already exists" in result.output
        assert output.read_text() == "existing content"

    def test_dump_output_exists_with_force(
        self, tmp_path: Path, testmodule_file: Path, testmodule_yaml: str
    ) -> None:
        """--force should overwrite the output file."""
        output = tmp_path / "out.yaml"
        output.write_text("existing content")

        result = runner.invoke(app, ["dump", str(testmodule_file), "-o", str(output), "--force"])
        assert result.exit_code == 0
        assert output.read_text() == testmodule_yaml

    def test_dump_strict_refuses_warnings(
        self, tmp_path: Path, empty_license_file: Path
    ) -> None:
        """A strict dump should not write documents with warnings."""
        output = tmp_path / "out.yaml"

        result = runner.invoke(
            app, ["dump", str(empty_license_file), "-o", str(output), "--strict"]
        )
        assert result.exit_code == 1
        assert "W001" in result.output
        assert not output.exists()


class TestInfoCommand:
    """Tests for the info command."""

    def test_info_yaml(self, testmodule_file: Path) -> None:
        """Test info on a module document file."""
        result = runner.invoke(app, ["info", str(testmodule_file)])
        assert result.exit_code == 0
        assert "1 document(s)" in result.stdout
        assert "testmodule" in result.stdout
        assert "MIT" in result.stdout

    def test_info_parse_error(self, tmp_path: Path) -> None:
        """Test info on a file that is not a module document."""
        yaml_file = tmp_path / "other.yaml"
        yaml_file.write_text("document: other\nversion: 2\ndata: {}\n")

        result = runner.invoke(app, ["info", str(yaml_file)])
        assert result.exit_code == 1
        assert "Unknown document type" in result.output


class TestVerbose:
    """Tests for the global --verbose option."""

    def test_verbose_accepted(self, testmodule_file: Path) -> None:
        """--verbose should not change the command result."""
        result = runner.invoke(app, ["--verbose", "validate", str(testmodule_file)])
        assert result.exit_code == 0
