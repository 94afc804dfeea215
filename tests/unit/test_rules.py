"""
Rules loading and startup configuration tests.

Verifies that the rules loader validates rules.yaml structure and that
startup fails fast when the rules disagree with the shape set.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from shape_area.app_shell.config import (
    RulesValidationError,
    bootstrap,
    configure_logging,
    validate_shape_rules,
)
from shape_area.rules.loader import (
    RULES_PATH_ENV,
    default_rules_path,
    extract_yaml,
    load_rules,
)
from shape_area.rules.models import LoggingRules, Rules

WriteRules = Callable[[dict[str, Any]], Path]


class TestRulesLoading:
    def test_load_actual_rules_file(self, valid_rules_path: Path) -> None:
        rules = load_rules(valid_rules_path)
        assert rules.project.slug == "shape-area"
        assert rules.shapes.kinds == ["square", "rectangle", "circle"]

    def test_load_nonexistent_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_rules(tmp_path / "missing.yaml")

    def test_load_invalid_yaml_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "rules.yaml"
        path.write_text("project: [unclosed\n")
        with pytest.raises(ValueError, match="Invalid YAML"):
            load_rules(path)

    def test_missing_section_raises(
        self, write_rules: WriteRules, valid_rules_data: dict[str, Any]
    ) -> None:
        del valid_rules_data["shapes"]
        with pytest.raises(ValueError, match="Rules validation failed"):
            load_rules(write_rules(valid_rules_data))

    def test_unknown_kind_raises(
        self, write_rules: WriteRules, valid_rules_data: dict[str, Any]
    ) -> None:
        valid_rules_data["shapes"]["kinds"].append("triangle")
        with pytest.raises(ValueError, match="Rules validation failed"):
            load_rules(write_rules(valid_rules_data))

    def test_unknown_log_level_raises(
        self, write_rules: WriteRules, valid_rules_data: dict[str, Any]
    ) -> None:
        valid_rules_data["logging"]["level"] = "LOUD"
        with pytest.raises(ValueError, match="Unknown logging level"):
            load_rules(write_rules(valid_rules_data))

    def test_log_level_normalized(
        self, write_rules: WriteRules, valid_rules_data: dict[str, Any]
    ) -> None:
        valid_rules_data["logging"]["level"] = "warning"
        rules = load_rules(write_rules(valid_rules_data))
        assert rules.logging.level == "WARNING"

    def test_logging_section_optional(
        self, write_rules: WriteRules, valid_rules_data: dict[str, Any]
    ) -> None:
        del valid_rules_data["logging"]
        rules = load_rules(write_rules(valid_rules_data))
        assert rules.logging == LoggingRules()

    def test_markdown_wrapped_rules(self, tmp_path: Path, valid_rules_path: Path) -> None:
        path = tmp_path / "rules.md"
        path.write_text(
            "# Shape rules\n\nNotes here.\n\n```yaml\n"
            + valid_rules_path.read_text()
            + "```\n\nTrailing prose.\n"
        )
        assert load_rules(path) == load_rules(valid_rules_path)


class TestExtractYaml:
    def test_plain_yaml_unchanged(self) -> None:
        assert extract_yaml("a: 1\nb: 2") == "a: 1\nb: 2"

    def test_fenced_block_extracted(self) -> None:
        assert extract_yaml("intro\n```yaml\na: 1\n```\nmore") == "a: 1"


class TestDefaultRulesPath:
    def test_env_override(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        target = tmp_path / "custom.yaml"
        monkeypatch.setenv(RULES_PATH_ENV, str(target))
        assert default_rules_path() == target

    def test_project_root_lookup(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        monkeypatch.delenv(RULES_PATH_ENV, raising=False)
        (tmp_path / "pyproject.toml").write_text("")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        monkeypatch.chdir(nested)
        assert default_rules_path() == tmp_path / "rules.yaml"


class TestValidateShapeRules:
    def test_matching_kinds_pass(self, valid_rules_data: dict[str, Any]) -> None:
        validate_shape_rules(Rules.model_validate(valid_rules_data))

    def test_order_does_not_matter(self, valid_rules_data: dict[str, Any]) -> None:
        valid_rules_data["shapes"]["kinds"] = ["circle", "square", "rectangle"]
        validate_shape_rules(Rules.model_validate(valid_rules_data))

    def test_missing_kind_fails(self, valid_rules_data: dict[str, Any]) -> None:
        valid_rules_data["shapes"]["kinds"] = ["square", "circle"]
        with pytest.raises(RulesValidationError) as exc_info:
            validate_shape_rules(Rules.model_validate(valid_rules_data))
        assert exc_info.value.errors == ["shapes.kinds is missing: rectangle"]

    def test_duplicate_and_missing_reported_together(
        self, valid_rules_data: dict[str, Any]
    ) -> None:
        valid_rules_data["shapes"]["kinds"] = ["square", "square", "circle"]
        with pytest.raises(RulesValidationError) as exc_info:
            validate_shape_rules(Rules.model_validate(valid_rules_data))
        assert len(exc_info.value.errors) == 2
        assert "duplicates: square" in exc_info.value.errors[1]


class TestBootstrap:
    def test_configure_logging(self, monkeypatch: pytest.MonkeyPatch) -> None:
        calls: list[dict[str, Any]] = []
        monkeypatch.setattr(logging, "basicConfig", lambda **kw: calls.append(kw))
        configure_logging(LoggingRules(level="DEBUG"))
        assert calls == [{"level": "DEBUG", "format": LoggingRules().format}]

    def test_bootstrap_loads_and_logs(
        self,
        write_rules: WriteRules,
        valid_rules_data: dict[str, Any],
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        caplog.set_level(logging.INFO, logger="shape_area.app_shell.config")
        rules = bootstrap(write_rules(valid_rules_data))
        assert rules.project.rules_version == "1.0"
        assert "Rules loaded successfully" in caplog.text

    def test_bootstrap_fails_fast(
        self, write_rules: WriteRules, valid_rules_data: dict[str, Any]
    ) -> None:
        valid_rules_data["shapes"]["kinds"] = ["square"]
        with pytest.raises(RulesValidationError):
            bootstrap(write_rules(valid_rules_data))
