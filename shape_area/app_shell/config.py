"""
Startup configuration: rules validation and logging setup.
"""

from __future__ import annotations

import logging
from pathlib import Path

from shape_area.components.shapes import SHAPE_KINDS
from shape_area.rules.loader import load_rules
from shape_area.rules.models import LoggingRules, Rules

logger = logging.getLogger(__name__)


class RulesValidationError(Exception):
    """Raised when rules disagree with the code's closed shape set."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = errors
        super().__init__(f"Rules validation failed: {'; '.join(errors)}")


def validate_shape_rules(rules: Rules) -> None:
    """
    Check that the rules declare exactly the shape kinds the code handles.

    Raises:
        RulesValidationError: Listing every missing or repeated kind.
    """
    declared = rules.shapes.kinds
    errors = []

    missing = [k for k in SHAPE_KINDS if k not in declared]
    if missing:
        errors.append(f"shapes.kinds is missing: {', '.join(missing)}")

    duplicates = sorted({k for k in declared if declared.count(k) > 1})
    if duplicates:
        errors.append(f"shapes.kinds has duplicates: {', '.join(duplicates)}")

    if errors:
        raise RulesValidationError(errors)


def configure_logging(rules: LoggingRules) -> None:
    logging.basicConfig(level=rules.level, format=rules.format)


def bootstrap(rules_path: Path | None = None) -> Rules:
    """
    Load and validate rules, then configure logging.
    Any failure propagates; the caller should not start.
    """
    rules = load_rules(rules_path)
    validate_shape_rules(rules)
    configure_logging(rules.logging)
    logger.info("Rules loaded successfully (version %s)", rules.project.rules_version)
    return rules
