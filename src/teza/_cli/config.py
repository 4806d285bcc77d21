"""Configuration loading from pyproject.toml."""

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import cast

DEFAULT_PRECISION = 5
DEFAULT_INPUTS: dict[str, float] = {"x1": 1.0, "x2": 2.0, "x3": 3.0}


class ConfigError(Exception):
    """Error in teza configuration."""


@dataclass(slots=True, frozen=True)
class TezaConfig:
    """Configuration loaded from the [tool.teza] table of pyproject.toml.

    Attributes:
        precision: Decimal digits printed results are rounded to.
        inputs: Starting values of the example expression's leaves.
        project_root: Directory containing the pyproject.toml, if one was found.

    """

    precision: int = DEFAULT_PRECISION
    inputs: dict[str, float] = field(default_factory=lambda: dict(DEFAULT_INPUTS))
    project_root: Path | None = None


def find_pyproject_toml(start_dir: Path | None = None) -> Path | None:
    """Find pyproject.toml by walking up from start_dir.

    Args:
        start_dir: Starting directory. Defaults to current working directory.

    Returns:
        Path to pyproject.toml if found, None otherwise.

    """
    if start_dir is None:
        start_dir = Path.cwd()

    current = start_dir.resolve()

    while True:
        candidate = current / "pyproject.toml"
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            return None
        current = parent


def _parse_precision(value: object) -> int:
    # bool is an int subclass but never a meaningful precision
    if not isinstance(value, int) or isinstance(value, bool) or value < 0:
        msg = f"Invalid [tool.teza].precision: expected a non-negative integer, got {value!r}"
        raise ConfigError(msg)
    return value


def _parse_inputs(value: object) -> dict[str, float]:
    if not isinstance(value, dict):
        msg = "Invalid [tool.teza].inputs: expected a table of leaf values"
        raise ConfigError(msg)

    inputs = dict(DEFAULT_INPUTS)
    for name, raw in cast("dict[str, object]", value).items():
        if name not in DEFAULT_INPUTS:
            known = ", ".join(DEFAULT_INPUTS)
            msg = f"Invalid [tool.teza].inputs: unknown leaf '{name}' (expected one of {known})"
            raise ConfigError(msg)
        if not isinstance(raw, int | float) or isinstance(raw, bool):
            msg = f"Invalid [tool.teza].inputs.{name}: expected a number, got {raw!r}"
            raise ConfigError(msg)
        inputs[name] = float(raw)
    return inputs


def load_config(pyproject_path: Path) -> TezaConfig:
    """Load and validate [tool.teza] config from pyproject.toml.

    Args:
        pyproject_path: Path to pyproject.toml

    Returns:
        Parsed TezaConfig

    Raises:
        ConfigError: If the configuration is invalid

    """
    project_root = pyproject_path.parent

    with pyproject_path.open("rb") as f:
        try:
            data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            msg = f"Invalid TOML in {pyproject_path}: {e}"
            raise ConfigError(msg) from e

    teza_section = data.get("tool", {}).get("teza", {})

    if not teza_section:
        return TezaConfig(project_root=project_root)

    precision = DEFAULT_PRECISION
    if "precision" in teza_section:
        precision = _parse_precision(teza_section["precision"])

    inputs = dict(DEFAULT_INPUTS)
    if "inputs" in teza_section:
        inputs = _parse_inputs(teza_section["inputs"])

    return TezaConfig(precision=precision, inputs=inputs, project_root=project_root)


def get_config() -> TezaConfig:
    """Get config from pyproject.toml in current directory or parents.

    Returns:
        TezaConfig (defaults if no pyproject.toml or no [tool.teza] section)

    """
    pyproject_path = find_pyproject_toml()
    if pyproject_path is None:
        return TezaConfig()
    return load_config(pyproject_path)
