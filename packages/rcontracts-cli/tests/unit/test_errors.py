"""Unit tests for rcontracts_cli.errors module."""

from __future__ import annotations

from pathlib import Path

import pytest

from rcontracts_core import CompilerConfig, ContractCompiler

from rcontracts_cli.errors import (
    EXIT_SYSTEM_ERROR,
    EXIT_USER_ERROR,
    CLIError,
    discover_sources,
    handle_permission_error,
    load_project_config,
)


class TestCLIError:
    """Tests for CLIError exception."""

    def test_cli_error_message(self) -> None:
        """CLIError stores its message."""
        error = CLIError("Test error message")
        assert error.message == "Test error message"
        assert str(error) == "Test error message"

    def test_cli_error_default_exit_code(self) -> None:
        """CLIError defaults to the user error exit code."""
        assert CLIError("Test error").exit_code == EXIT_USER_ERROR

    def test_cli_error_custom_exit_code(self) -> None:
        """CLIError accepts a custom exit code."""
        error = CLIError("Test error", exit_code=EXIT_SYSTEM_ERROR)
        assert error.exit_code == EXIT_SYSTEM_ERROR

    def test_show_prints_message(self, capsys: pytest.CaptureFixture[str]) -> None:
        """show() prints the message through the console."""
        CLIError("Contract not found: Checkout").show()
        captured = capsys.readouterr()
        assert "Contract not found: Checkout" in captured.out
        assert "✗" in captured.out


class TestLoadProjectConfig:
    """Tests for load_project_config function."""

    def test_defaults_without_file(self, tmp_path: Path) -> None:
        """A project without rcontracts.yaml uses the defaults."""
        config = load_project_config(None, tmp_path)
        assert config == CompilerConfig()

    def test_reads_project_file(self, tmp_path: Path) -> None:
        """rcontracts.yaml in the project root is loaded."""
        (tmp_path / "rcontracts.yaml").write_text("contracts: specs/*_contract.py\n")
        config = load_project_config(None, tmp_path)
        assert config.contracts == "specs/*_contract.py"

    def test_invalid_yaml_raises_cli_error(self, tmp_path: Path) -> None:
        """Broken YAML becomes a user error."""
        (tmp_path / "rcontracts.yaml").write_text("output: [unclosed\n")
        with pytest.raises(CLIError) as exc_info:
            load_project_config(None, tmp_path)

        assert "Invalid YAML" in str(exc_info.value)
        assert exc_info.value.exit_code == EXIT_USER_ERROR


class TestDiscoverSources:
    """Tests for discover_sources function."""

    def test_returns_matches(self, tmp_path: Path) -> None:
        """Matching sources are returned relative to the project."""
        (tmp_path / "contracts").mkdir()
        (tmp_path / "contracts" / "user_contract.py").write_text("")
        compiler = ContractCompiler(CompilerConfig(), tmp_path)
        assert discover_sources(compiler) == ["contracts/user_contract.py"]

    def test_no_matches_suggests_init(self, tmp_path: Path) -> None:
        """An empty project points at rcontracts init."""
        compiler = ContractCompiler(CompilerConfig(), tmp_path)
        with pytest.raises(CLIError) as exc_info:
            discover_sources(compiler)

        assert "No contract files found" in str(exc_info.value)
        assert "rcontracts init" in str(exc_info.value)
        assert exc_info.value.exit_code == EXIT_USER_ERROR

    def test_missing_project_dir(self, tmp_path: Path) -> None:
        """A missing project directory is a system error."""
        compiler = ContractCompiler(CompilerConfig(), tmp_path / "missing")
        with pytest.raises(CLIError) as exc_info:
            discover_sources(compiler)

        assert exc_info.value.exit_code == EXIT_SYSTEM_ERROR


class TestHandlePermissionError:
    """Tests for handle_permission_error function."""

    def test_raises_cli_error(self) -> None:
        """handle_permission_error raises a system error."""
        with pytest.raises(CLIError) as exc_info:
            handle_permission_error("/path/to/file", "write to")

        assert "Permission denied: Cannot write to /path/to/file" in str(exc_info.value)
        assert exc_info.value.exit_code == EXIT_SYSTEM_ERROR

    def test_default_operation(self) -> None:
        """The default operation is 'access'."""
        with pytest.raises(CLIError) as exc_info:
            handle_permission_error("/path/to/file")

        assert "access" in str(exc_info.value)
