from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
import yaml

PROJECT_ROOT = Path(__file__).parent.parent


@pytest.fixture
def project_root() -> Path:
    return PROJECT_ROOT


@pytest.fixture
def valid_rules_path(project_root: Path) -> Path:
    """Path to the real rules.yaml shipped with the project."""
    return project_root / "rules.yaml"


@pytest.fixture
def valid_rules_data() -> dict[str, Any]:
    return {
        "project": {"slug": "shape-area", "rules_version": "1.0"},
        "logging": {"level": "DEBUG"},
        "shapes": {"kinds": ["square", "rectangle", "circle"]},
    }


@pytest.fixture
def write_rules(tmp_path: Path) -> Callable[[dict[str, Any]], Path]:
    """Write a rules dict to a temporary YAML file and return its path."""

    def _write(rules: dict[str, Any]) -> Path:
        path = tmp_path / "rules.yaml"
        with open(path, "w") as f:
            yaml.dump(rules, f)
        return path

    return _write
