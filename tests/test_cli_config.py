"""Tests for the CLI configuration module."""

from pathlib import Path

import pytest

from teza._cli.config import (
    DEFAULT_INPUTS,
    DEFAULT_PRECISION,
    ConfigError,
    TezaConfig,
    find_pyproject_toml,
    get_config,
    load_config,
)


def write_pyproject(tmp_path: Path, content: str) -> Path:
    pyproject = tmp_path / "pyproject.toml"
    pyproject.write_text(content)
    return pyproject


class TestFindPyprojectToml:
    """Tests for find_pyproject_toml function."""

    def test_finds_in_current_directory(self, tmp_path: Path) -> None:
        """Should find pyproject.toml in current directory."""
        pyproject = write_pyproject(tmp_path, "[project]\nname = 'test'\n")

        assert find_pyproject_toml(tmp_path) == pyproject

    def test_finds_in_parent_directory(self, tmp_path: Path) -> None:
        """Should find pyproject.toml in parent directory."""
        pyproject = write_pyproject(tmp_path, "[project]\nname = 'test'\n")
        subdir = tmp_path / "src" / "pkg"
        subdir.mkdir(parents=True)

        assert find_pyproject_toml(subdir) == pyproject

    def test_returns_none_when_not_found(self, tmp_path: Path) -> None:
        """Should return None when no pyproject.toml is found."""
        assert find_pyproject_toml(tmp_path) is None


class TestLoadConfig:
    """Tests for loading the [tool.teza] table."""

    def test_precision(self, tmp_path: Path) -> None:
        pyproject = write_pyproject(tmp_path, "[tool.teza]\nprecision = 3\n")

        config = load_config(pyproject)

        assert config.precision == 3
        assert config.inputs == DEFAULT_INPUTS
        assert config.project_root == tmp_path

    def test_partial_inputs_keep_defaults(self, tmp_path: Path) -> None:
        pyproject = write_pyproject(
            tmp_path,
            """
[tool.teza.inputs]
x1 = 2
x3 = 4.5
""",
        )

        config = load_config(pyproject)

        assert config.inputs == {"x1": 2.0, "x2": 2.0, "x3": 4.5}
        assert config.precision == DEFAULT_PRECISION

    def test_no_tool_teza_section(self, tmp_path: Path) -> None:
        """Should return defaults when [tool.teza] is missing."""
        pyproject = write_pyproject(tmp_path, "[project]\nname = 'test'\n")

        config = load_config(pyproject)

        assert config == TezaConfig(project_root=tmp_path)

    def test_empty_tool_teza_section(self, tmp_path: Path) -> None:
        pyproject = write_pyproject(tmp_path, "[tool.teza]\n")

        assert load_config(pyproject).precision == DEFAULT_PRECISION


class TestLoadConfigErrors:
    """Tests for configuration error handling."""

    def test_invalid_toml_raises_error(self, tmp_path: Path) -> None:
        """Should raise ConfigError for invalid TOML."""
        pyproject = write_pyproject(tmp_path, "invalid toml [[[")

        with pytest.raises(ConfigError, match="Invalid TOML"):
            load_config(pyproject)

    @pytest.mark.parametrize("value", ["-1", "'five'", "true", "2.5"])
    def test_invalid_precision(self, tmp_path: Path, value: str) -> None:
        pyproject = write_pyproject(tmp_path, f"[tool.teza]\nprecision = {value}\n")

        with pytest.raises(ConfigError, match=r"Invalid \[tool.teza\].precision"):
            load_config(pyproject)

    def test_inputs_not_a_table(self, tmp_path: Path) -> None:
        pyproject = write_pyproject(tmp_path, "[tool.teza]\ninputs = [1, 2, 3]\n")

        with pytest.raises(ConfigError, match="expected a table"):
            load_config(pyproject)

    def test_unknown_input_name(self, tmp_path: Path) -> None:
        pyproject = write_pyproject(tmp_path, "[tool.teza.inputs]\nx4 = 1.0\n")

        with pytest.raises(ConfigError, match="unknown leaf 'x4'"):
            load_config(pyproject)

    def test_non_numeric_input(self, tmp_path: Path) -> None:
        pyproject = write_pyproject(tmp_path, "[tool.teza.inputs]\nx1 = 'one'\n")

        with pytest.raises(ConfigError, match=r"inputs.x1: expected a number"):
            load_config(pyproject)


class TestGetConfig:
    """Tests for config discovery from the working directory."""

    def test_reads_nearest_pyproject(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        write_pyproject(tmp_path, "[tool.teza]\nprecision = 2\n")
        subdir = tmp_path / "nested"
        subdir.mkdir()
        monkeypatch.chdir(subdir)

        assert get_config().precision == 2


class TestTezaConfigDataclass:
    """Tests for the TezaConfig dataclass."""

    def test_default_values(self) -> None:
        config = TezaConfig()

        assert config.precision == DEFAULT_PRECISION
        assert config.inputs == {"x1": 1.0, "x2": 2.0, "x3": 3.0}
        assert config.project_root is None

    def test_default_inputs_not_shared(self) -> None:
        config = TezaConfig()
        config.inputs["x1"] = 10.0

        assert TezaConfig().inputs["x1"] == 1.0

    def test_frozen(self) -> None:
        config = TezaConfig()

        with pytest.raises(AttributeError):
            config.precision = 1  # type: ignore[misc]
