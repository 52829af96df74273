"""Unit tests for rcontracts.yaml loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from rcontracts_core import CompilerConfig, ConfigurationError, load_config
from rcontracts_core.config import CONFIG_ENV_VAR, find_config_file


@pytest.fixture(autouse=True)
def clear_config_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure RCONTRACTS_CONFIG from the environment never leaks in."""
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)


class TestFindConfigFile:
    """Tests for configuration file resolution."""

    def test_no_file(self, tmp_path: Path) -> None:
        """No file and no env var means defaults."""
        assert find_config_file(tmp_path) is None

    def test_yaml_preferred_over_yml(self, tmp_path: Path) -> None:
        """rcontracts.yaml wins over rcontracts.yml."""
        (tmp_path / "rcontracts.yml").write_text("{}\n")
        (tmp_path / "rcontracts.yaml").write_text("{}\n")
        assert find_config_file(tmp_path) == tmp_path / "rcontracts.yaml"

    def test_yml_fallback(self, tmp_path: Path) -> None:
        """rcontracts.yml is found when it is the only file."""
        (tmp_path / "rcontracts.yml").write_text("{}\n")
        assert find_config_file(tmp_path) == tmp_path / "rcontracts.yml"

    def test_env_var_wins(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """RCONTRACTS_CONFIG overrides the project file."""
        (tmp_path / "rcontracts.yaml").write_text("{}\n")
        custom = tmp_path / "custom.yaml"
        monkeypatch.setenv(CONFIG_ENV_VAR, str(custom))
        assert find_config_file(tmp_path) == custom


class TestLoadConfig:
    """Tests for load_config()."""

    def test_defaults_without_file(self, tmp_path: Path) -> None:
        """Without a file the defaults apply."""
        assert load_config(cwd=tmp_path) == CompilerConfig()

    def test_loads_project_file(self, tmp_path: Path) -> None:
        """Values from rcontracts.yaml override the defaults."""
        (tmp_path / "rcontracts.yaml").write_text(
            "contracts: src/**/*_contract.py\n"
            "output:\n"
            "  frontend: web/generated\n"
            "validation:\n"
            "  strictLatency: true\n"
            "  maxComplexity: 5\n"
            "integrations:\n"
            "  devServer: {port: 3000}\n"
        )
        config = load_config(cwd=tmp_path)
        assert config.contracts == "src/**/*_contract.py"
        assert config.output.frontend == "web/generated"
        assert config.output.backend == "generated/backend"
        assert config.validation.strict_latency is True
        assert config.validation.max_complexity == 5
        assert config.integrations == {"devServer": {"port": 3000}}

    def test_empty_file_gives_defaults(self, tmp_path: Path) -> None:
        """An empty YAML document is the default configuration."""
        (tmp_path / "rcontracts.yaml").write_text("")
        assert load_config(cwd=tmp_path) == CompilerConfig()

    def test_explicit_missing_path(self, tmp_path: Path) -> None:
        """An explicit path must exist."""
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(tmp_path / "missing.yaml")
        assert "not found" in exc_info.value.user_message
        assert exc_info.value.file_path == str(tmp_path / "missing.yaml")

    def test_invalid_yaml_reports_line(self, tmp_path: Path) -> None:
        """YAML syntax errors carry a line number."""
        path = tmp_path / "rcontracts.yaml"
        path.write_text("contracts: ok\noutput: [unclosed\n")
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(path)
        assert "Invalid YAML" in exc_info.value.user_message
        assert exc_info.value.line_number is not None

    def test_schema_error_reports_field(self, tmp_path: Path) -> None:
        """Unknown or mistyped keys carry the field path."""
        path = tmp_path / "rcontracts.yaml"
        path.write_text("validation:\n  strictLatency: maybe\n")
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(path)
        assert exc_info.value.field_path == "validation.strictLatency"
        assert "field 'validation.strictLatency'" in exc_info.value.user_message

    def test_unknown_key_rejected(self, tmp_path: Path) -> None:
        """Unknown top-level keys are configuration errors."""
        path = tmp_path / "rcontracts.yaml"
        path.write_text("contract: typo\n")
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(path)
        assert exc_info.value.field_path == "contract"

    def test_from_yaml_missing_file(self, tmp_path: Path) -> None:
        """CompilerConfig.from_yaml raises FileNotFoundError directly."""
        with pytest.raises(FileNotFoundError):
            CompilerConfig.from_yaml(tmp_path / "missing.yaml")
