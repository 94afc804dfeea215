import os
from pathlib import Path

import yaml
from pydantic import ValidationError

from shape_area.rules.models import Rules

# Default rules file name (relative to project root)
DEFAULT_RULES_PATH = "rules.yaml"
RULES_PATH_ENV = "SHAPE_AREA_RULES_PATH"


def find_project_root() -> Path:
    """Find project root by walking up to a pyproject.toml."""
    current = Path.cwd()
    for parent in [current, *current.parents]:
        if (parent / "pyproject.toml").exists():
            return parent
    return current


def default_rules_path() -> Path:
    """Rules path from the environment, else rules.yaml under the project root."""
    env_path = os.environ.get(RULES_PATH_ENV)
    if env_path:
        return Path(env_path)
    return find_project_root() / DEFAULT_RULES_PATH


def extract_yaml(content: str) -> str:
    """
    Return the first ```yaml fenced block of a Markdown document.
    Content with no such block is returned unchanged.
    """
    yaml_lines = []
    in_block = False
    found_block = False

    for line in content.splitlines():
        s_line = line.strip()
        if s_line.startswith("```yaml"):
            in_block = True
            found_block = True
            continue
        if in_block and s_line.startswith("```"):
            break
        if in_block:
            yaml_lines.append(line)

    if found_block:
        return "\n".join(yaml_lines)
    return content


def load_rules(path: Path | None = None) -> Rules:
    """
    Load and validate the rules file.
    Raises FileNotFoundError if file missing.
    Raises ValueError if the YAML or the schema is invalid.
    """
    if path is None:
        path = default_rules_path()

    if not path.exists():
        raise FileNotFoundError(f"Rules file not found at: {path}")

    with open(path) as f:
        content = f.read()

    try:
        data = yaml.safe_load(extract_yaml(content))
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML syntax in rules file: {e}") from e

    try:
        return Rules.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Rules validation failed:\n{e}") from e
